"""
Formulario de asignación de materias a un profesor.

Mantiene el estado del formulario (materias, filtros, selección y su copia
inicial) y lo recalcula en cada cambio. Las materias se guardan en el profesor
como nombres separados por comas; el formato anterior guardaba ids numéricos y
se sigue aceptando al leer.
"""
import asyncio
import logging
from typing import Callable, List, Optional, Set

from app.core.api_client import AcademicApiClient, ApiError
from app.schemas.materia import CourseSubject, Degree
from app.schemas.profesor import Professor
from app.utils.helpers import is_legacy_id_list, join_classes, split_classes

logger = logging.getLogger(__name__)

ALL_DEGREES = "all"


class Notifier:
    """Notificaciones para el operador; por defecto solo se registran en el log"""

    def success(self, message: str):
        logger.info(f"✅ {message}")

    def error(self, message: str):
        logger.error(f"❌ {message}")


class ProfessorClassesForm:
    def __init__(
        self,
        client: AcademicApiClient,
        professor: Optional[Professor] = None,
        on_save: Optional[Callable[[str], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.client = client
        self.on_save = on_save
        self.on_cancel = on_cancel
        self.notifier = notifier or Notifier()

        self.subjects: List[CourseSubject] = []
        self.filtered_subjects: List[CourseSubject] = []
        self.degrees: List[Degree] = []
        self.selected_subjects: Set[int] = set()
        self.initial_selected_subjects: Set[int] = set()
        self.has_changes = False
        self.is_loading = True
        self.is_saving = False

        self._selected_degree_id = ALL_DEGREES
        self._search_query = ""
        self._professor = professor

    # Estado observado: cada cambio recalcula la lista filtrada

    @property
    def professor(self) -> Optional[Professor]:
        return self._professor

    @professor.setter
    def professor(self, value: Optional[Professor]):
        self._professor = value
        self._sync_selection_from_professor()
        self._refresh_filtered()

    @property
    def selected_degree_id(self) -> str:
        return self._selected_degree_id

    @selected_degree_id.setter
    def selected_degree_id(self, value) -> None:
        self._selected_degree_id = str(value)
        self._refresh_filtered()

    @property
    def search_query(self) -> str:
        return self._search_query

    @search_query.setter
    def search_query(self, value: str) -> None:
        self._search_query = value
        self._refresh_filtered()

    @property
    def can_save(self) -> bool:
        return self.has_changes and not self.is_saving

    @property
    def selected_subject_list(self) -> List[CourseSubject]:
        """Materias seleccionadas, mostradas aparte de las disponibles"""
        by_id = {s.id: s for s in self.subjects}
        return [by_id[i] for i in self.selected_subjects if i in by_id]

    def professor_display_name(self) -> str:
        p = self._professor
        if p is None:
            return ""
        if p.first_surname or p.second_surname:
            parts = [x for x in (p.first_name, p.first_surname, p.second_surname) if x]
            return " ".join(parts) if parts else (p.name or "")
        if p.first_name or p.last_name:
            return f"{p.first_name or ''} {p.last_name or ''}".strip()
        return p.name or "Profesor"

    # Carga de datos

    async def load(self):
        await asyncio.gather(self._fetch_degrees(), self._fetch_course_details())

    async def _fetch_degrees(self):
        try:
            data = await self.client.get_degrees()
            if isinstance(data, dict) and isinstance(data.get("degrees"), list):
                self.degrees = [Degree.model_validate(d) for d in data["degrees"]]
            else:
                logger.warning("⚠️ La API no devolvió carreras válidas")
                self.degrees = []
        except Exception as e:
            logger.error(f"❌ Error obteniendo carreras: {e}")
            self.degrees = []

    async def _fetch_course_details(self):
        self.is_loading = True
        try:
            data = await self.client.get_course_details()
            if (
                isinstance(data, dict)
                and data.get("success")
                and isinstance(data.get("data"), list)
            ):
                courses = []
                for raw in data["data"]:
                    course = CourseSubject.model_validate(
                        {"id": raw["id"], "name": raw["name"], "plans": raw.get("plans")}
                    )
                    course.degree_ids = [plan.degree.id for plan in course.plans or []]
                    courses.append(course)
                self._set_subjects(courses)
            else:
                await self._fetch_basic_subjects()
        except Exception as e:
            logger.warning(f"⚠️ Error obteniendo detalle de materias: {e}")
            await self._fetch_basic_subjects()
        finally:
            self.is_loading = False

    async def _fetch_basic_subjects(self):
        try:
            data = await self.client.get_subjects()
        except ApiError as e:
            logger.error(f"❌ Error obteniendo materias: {e}")
            self._set_subjects([])
            self.notifier.error("No se pudieron obtener las materias")
            return
        except Exception as e:
            logger.error(f"❌ Error obteniendo materias: {e}")
            self._set_subjects([])
            self.notifier.error("Error al cargar las materias")
            return

        if not isinstance(data, list):
            self._set_subjects([])
            self.notifier.error("Formato de materias inválido")
            return

        self._set_subjects(
            [CourseSubject(id=subject["id"], name=subject["name"]) for subject in data]
        )

    def _set_subjects(self, subjects: List[CourseSubject]):
        self.subjects = subjects
        self.filtered_subjects = list(subjects)
        self._sync_selection_from_professor()
        self._refresh_filtered()

    # Selección

    def _sync_selection_from_professor(self):
        classes = self._professor.classes if self._professor else None
        if not classes or not self.subjects:
            return

        try:
            if is_legacy_id_list(classes):
                class_ids = {int(part) for part in split_classes(classes)}
            else:
                class_names = split_classes(classes)
                class_ids = {s.id for s in self.subjects if s.name in class_names}
        except ValueError as e:
            logger.error(f"❌ Error procesando las materias del profesor: {e}")
            return

        self.selected_subjects = set(class_ids)
        self.initial_selected_subjects = set(class_ids)

    def _refresh_filtered(self):
        filtered = list(self.subjects)

        if self._selected_degree_id != ALL_DEGREES:
            try:
                degree_id = int(self._selected_degree_id)
            except ValueError:
                degree_id = None
            filtered = [s for s in filtered if degree_id in s.degree_ids]

        query = self._search_query.strip().lower()
        if query:
            filtered = [s for s in filtered if query in s.name.lower()]

        self.filtered_subjects = [s for s in filtered if s.id not in self.selected_subjects]

    def toggle_subject(self, subject_id: int):
        selected = set(self.selected_subjects)
        if subject_id in selected:
            selected.remove(subject_id)
        else:
            selected.add(subject_id)
        self.selected_subjects = selected
        self.has_changes = selected != self.initial_selected_subjects
        self._refresh_filtered()

    # Acciones

    async def save(self) -> bool:
        if self._professor is None or self.is_saving:
            return False

        self.is_saving = True
        try:
            by_id = {s.id: s.name for s in self.subjects}
            names = [by_id.get(i, "") for i in self.selected_subjects]
            classes = join_classes(name for name in names if name)

            await self.client.update_professor_classes(self._professor.id, classes)

            self.notifier.success("Materias actualizadas correctamente")
            if self.on_save:
                self.on_save(classes)
            self.initial_selected_subjects = set(self.selected_subjects)
            self.has_changes = False
            return True
        except Exception as e:
            logger.error(f"❌ Error guardando las materias del profesor: {e}")
            self.notifier.error("Error al guardar las materias")
            return False
        finally:
            self.is_saving = False

    def cancel(self):
        self.selected_subjects = set(self.initial_selected_subjects)
        self.has_changes = False
        self._refresh_filtered()
        if self.on_cancel:
            self.on_cancel()
