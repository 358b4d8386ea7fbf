import pytest
from aiohttp import web
from aiohttp import test_utils

from app.core.api_client import AcademicApiClient, ApiError
from app.core.professor_classes import Notifier, ProfessorClassesForm
from app.schemas.profesor import Professor

CARRERAS = [
    {"id": 10, "name": "Software", "status": "activo"},
    {"id": 20, "name": "Videojuegos", "status": "activo"},
]


def _plan(id_plan, carrera):
    return {"id": id_plan, "version": "2023", "status": "activo", "degree": carrera}


COURSE_DETAILS = [
    {"id": 1, "name": "Algebra", "plans": [_plan(1, CARRERAS[0]), _plan(2, CARRERAS[1])]},
    {"id": 2, "name": "Calculus", "plans": [_plan(1, CARRERAS[0])]},
    {"id": 3, "name": "Physics", "plans": [_plan(1, CARRERAS[0])]},
    {"id": 4, "name": "Modelado 3D", "plans": [_plan(2, CARRERAS[1])]},
]


class RecordingNotifier(Notifier):
    def __init__(self):
        self.successes = []
        self.errors = []

    def success(self, message):
        self.successes.append(message)

    def error(self, message):
        self.errors.append(message)


@pytest.fixture
def api_state():
    """Estado de la API falsa; las pruebas lo modifican para simular fallos"""
    return {
        "degrees_status": 200,
        "details_status": 200,
        "details_success": True,
        "subjects_status": 200,
        "subjects_payload": [{"id": c["id"], "name": c["name"]} for c in COURSE_DETAILS],
        "save_fails": False,
        "save_status": 500,
        "professors": {"PROF001": ""},
    }


@pytest.fixture
async def api_client(api_state):
    async def get_degrees(request):
        if api_state["degrees_status"] != 200:
            return web.json_response({"error": "fallo"}, status=api_state["degrees_status"])
        return web.json_response({"degrees": CARRERAS})

    async def get_course_details(request):
        if api_state["details_status"] != 200:
            return web.json_response({"error": "fallo"}, status=api_state["details_status"])
        return web.json_response(
            {"success": api_state["details_success"], "data": COURSE_DETAILS}
        )

    async def get_subjects(request):
        if api_state["subjects_status"] != 200:
            return web.json_response({"error": "fallo"}, status=api_state["subjects_status"])
        return web.json_response(api_state["subjects_payload"])

    async def post_professors(request):
        body = await request.json()
        if api_state["save_fails"]:
            return web.json_response(
                {"success": False, "error": "fallo"}, status=api_state["save_status"]
            )
        api_state["professors"][body["professorId"]] = body["classes"]
        return web.json_response({"success": True})

    web_app = web.Application()
    web_app.router.add_get("/api/getDegrees", get_degrees)
    web_app.router.add_get("/api/course-details", get_course_details)
    web_app.router.add_get("/api/subjects", get_subjects)
    web_app.router.add_post("/api/professors", post_professors)

    server = test_utils.TestServer(web_app)
    await server.start_server()
    async with AcademicApiClient(base_url=str(server.make_url(""))) as client:
        yield client
    await server.close()


def _profesor(classes="", **kwargs):
    return Professor(id="PROF001", name="Laura Méndez", classes=classes, **kwargs)


async def _form(api_client, classes="", **kwargs):
    form = ProfessorClassesForm(api_client, professor=_profesor(classes), **kwargs)
    await form.load()
    return form


def _ids(subjects):
    return [s.id for s in subjects]


class TestCarga:

    async def test_carga_carreras_y_materias_con_ids_de_carrera(self, api_client):
        form = await _form(api_client)

        assert form.is_loading is False
        assert [d.id for d in form.degrees] == [10, 20]
        assert form.subjects[0].degree_ids == [10, 20]
        assert _ids(form.filtered_subjects) == [1, 2, 3, 4]

    async def test_error_en_carreras_deja_lista_vacia(self, api_client, api_state):
        api_state["degrees_status"] = 500

        form = await _form(api_client)

        assert form.degrees == []
        assert len(form.subjects) == 4

    async def test_usa_lista_basica_si_falla_el_detalle(self, api_client, api_state):
        api_state["details_status"] = 500

        form = await _form(api_client, classes="Calculus")

        assert _ids(form.subjects) == [1, 2, 3, 4]
        assert all(s.degree_ids == [] for s in form.subjects)
        assert form.selected_subjects == {2}

    async def test_usa_lista_basica_si_el_detalle_no_es_exitoso(self, api_client, api_state):
        api_state["details_success"] = False
        api_state["subjects_payload"] = [{"id": 9, "name": "Química"}]

        form = await _form(api_client)

        assert _ids(form.subjects) == [9]

    async def test_ambos_endpoints_fallan(self, api_client, api_state):
        api_state["details_status"] = 500
        api_state["subjects_status"] = 503
        notifier = RecordingNotifier()

        form = await _form(api_client, notifier=notifier)

        assert form.subjects == []
        assert form.filtered_subjects == []
        assert notifier.errors == ["No se pudieron obtener las materias"]

    async def test_formato_de_materias_invalido(self, api_client, api_state):
        api_state["details_status"] = 500
        api_state["subjects_payload"] = {"materias": []}
        notifier = RecordingNotifier()

        form = await _form(api_client, notifier=notifier)

        assert form.subjects == []
        assert notifier.errors == ["Formato de materias inválido"]


class TestSeleccion:

    async def test_nombres_del_profesor_se_vuelven_seleccion(self, api_client):
        form = await _form(api_client, classes="Algebra,Calculus")

        assert form.selected_subjects == {1, 2}
        assert form.initial_selected_subjects == {1, 2}
        assert form.has_changes is False
        assert _ids(form.filtered_subjects) == [3, 4]
        assert sorted(_ids(form.selected_subject_list)) == [1, 2]

    async def test_solo_queda_disponible_la_materia_no_asignada(self, api_client, api_state):
        api_state["details_status"] = 500
        api_state["subjects_payload"] = [
            {"id": 1, "name": "Algebra"},
            {"id": 2, "name": "Calculus"},
            {"id": 3, "name": "Physics"},
        ]

        form = await _form(api_client, classes="Algebra,Calculus")

        assert form.selected_subjects == {1, 2}
        assert [s.name for s in form.filtered_subjects] == ["Physics"]

    async def test_formato_anterior_de_ids(self, api_client):
        form = await _form(api_client, classes="1,3")

        assert form.selected_subjects == {1, 3}
        assert _ids(form.filtered_subjects) == [2, 4]

    async def test_profesor_sin_materias(self, api_client):
        form = await _form(api_client, classes="")

        assert form.selected_subjects == set()

    async def test_cambiar_de_profesor_recalcula_la_seleccion(self, api_client):
        form = await _form(api_client, classes="Algebra")

        form.professor = _profesor("Physics")

        assert form.selected_subjects == {3}
        assert _ids(form.filtered_subjects) == [1, 2, 4]

    async def test_toggle_dos_veces_no_deja_cambios(self, api_client):
        form = await _form(api_client, classes="Algebra")

        form.toggle_subject(3)
        assert form.has_changes is True
        assert form.can_save is True
        assert 3 not in _ids(form.filtered_subjects)

        form.toggle_subject(3)
        assert form.has_changes is False
        assert form.can_save is False
        assert 3 in _ids(form.filtered_subjects)

    async def test_quitar_y_volver_a_poner_una_materia_inicial(self, api_client):
        form = await _form(api_client, classes="Algebra")

        form.toggle_subject(1)
        assert form.selected_subjects == set()
        assert form.has_changes is True

        form.toggle_subject(1)
        assert form.has_changes is False


class TestFiltros:

    async def test_filtro_por_carrera(self, api_client):
        form = await _form(api_client)

        form.selected_degree_id = "20"
        assert _ids(form.filtered_subjects) == [1, 4]

        form.selected_degree_id = "all"
        assert _ids(form.filtered_subjects) == [1, 2, 3, 4]

    async def test_busqueda_sin_distinguir_mayusculas(self, api_client):
        form = await _form(api_client)

        form.search_query = "  CALC "

        assert _ids(form.filtered_subjects) == [2]

    async def test_filtros_combinados_excluyen_seleccionadas(self, api_client):
        form = await _form(api_client, classes="Algebra")

        form.selected_degree_id = 20
        form.search_query = "a"

        assert _ids(form.filtered_subjects) == [4]


class TestGuardarYCancelar:

    async def test_guardar_envia_nombres_separados_por_comas(self, api_client, api_state):
        guardados = []
        notifier = RecordingNotifier()
        form = await _form(api_client, on_save=guardados.append, notifier=notifier)

        form.toggle_subject(1)
        form.toggle_subject(3)
        assert await form.save() is True

        assert set(api_state["professors"]["PROF001"].split(",")) == {"Algebra", "Physics"}
        assert guardados == [api_state["professors"]["PROF001"]]
        assert notifier.successes == ["Materias actualizadas correctamente"]
        assert form.initial_selected_subjects == {1, 3}
        assert form.has_changes is False
        assert form.is_saving is False

    async def test_ida_y_vuelta_por_nombres(self, api_client, api_state):
        form = await _form(api_client)
        form.toggle_subject(1)
        form.toggle_subject(3)
        await form.save()

        recargado = await _form(api_client, classes=api_state["professors"]["PROF001"])

        assert recargado.selected_subjects == {1, 3}

    async def test_ida_y_vuelta_desde_formato_anterior(self, api_client, api_state):
        form = await _form(api_client, classes="1,3")
        form.toggle_subject(2)
        form.toggle_subject(2)
        await form.save()

        guardado = api_state["professors"]["PROF001"]
        assert set(guardado.split(",")) == {"Algebra", "Physics"}

        recargado = await _form(api_client, classes=guardado)
        assert recargado.selected_subjects == {1, 3}

    async def test_fallo_al_guardar_no_cambia_el_estado(self, api_client, api_state):
        api_state["save_fails"] = True
        guardados = []
        notifier = RecordingNotifier()
        form = await _form(api_client, classes="Algebra", on_save=guardados.append, notifier=notifier)

        form.toggle_subject(2)
        assert await form.save() is False

        assert notifier.errors == ["Error al guardar las materias"]
        assert guardados == []
        assert form.selected_subjects == {1, 2}
        assert form.initial_selected_subjects == {1}
        assert form.has_changes is True
        assert form.is_saving is False

    async def test_no_guarda_sin_profesor_o_con_guardado_en_curso(self, api_client):
        form = ProfessorClassesForm(api_client)
        await form.load()
        assert await form.save() is False

        form.professor = _profesor()
        form.is_saving = True
        assert form.can_save is False
        assert await form.save() is False

    async def test_cancelar_restaura_la_seleccion_inicial(self, api_client):
        cancelados = []
        form = await _form(api_client, classes="Algebra", on_cancel=lambda: cancelados.append(True))

        form.toggle_subject(2)
        form.toggle_subject(1)
        form.cancel()

        assert form.selected_subjects == {1}
        assert form.has_changes is False
        assert _ids(form.filtered_subjects) == [2, 3, 4]
        assert cancelados == [True]


class TestNombreDelProfesor:

    def test_nombre_con_apellidos(self):
        form = ProfessorClassesForm(
            None,
            professor=_profesor(first_name="Laura", first_surname="Méndez", second_surname="Ríos"),
        )
        assert form.professor_display_name() == "Laura Méndez Ríos"

    def test_nombre_y_apellido(self):
        form = ProfessorClassesForm(None, professor=_profesor(first_name="Laura", last_name="Méndez"))
        assert form.professor_display_name() == "Laura Méndez"

    def test_solo_nombre(self):
        form = ProfessorClassesForm(None, professor=_profesor())
        assert form.professor_display_name() == "Laura Méndez"

    def test_sin_datos(self):
        form = ProfessorClassesForm(None, professor=Professor(id="X"))
        assert form.professor_display_name() == "Profesor"
        assert ProfessorClassesForm(None).professor_display_name() == ""


class TestClienteApi:

    async def test_actualizar_materias_devuelve_el_cuerpo(self, api_client, api_state):
        data = await api_client.update_professor_classes("PROF001", "Algebra")

        assert data == {"success": True}
        assert api_state["professors"]["PROF001"] == "Algebra"

    async def test_error_al_actualizar_conserva_status_y_mensaje(self, api_client, api_state):
        api_state["save_fails"] = True

        with pytest.raises(ApiError) as exc_info:
            await api_client.update_professor_classes("PROF001", "Algebra")

        assert exc_info.value.status == 500
        assert exc_info.value.message == "fallo"

    async def test_success_false_con_status_200(self, api_client, api_state):
        api_state["save_fails"] = True
        api_state["save_status"] = 200

        with pytest.raises(ApiError) as exc_info:
            await api_client.update_professor_classes("PROF001", "Algebra")

        assert exc_info.value.status == 200
        assert exc_info.value.message == "fallo"
