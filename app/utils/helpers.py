import re
from typing import Any, Dict, Iterable, List, Optional

# Formato anterior de `profesor.clases`: ids numéricos separados por comas
LEGACY_ID_LIST = re.compile(r"^\d+(,\d+)*$")


def is_legacy_id_list(classes: str) -> bool:
    """True si el texto es una lista de ids ("1,2,3") y no de nombres"""
    return bool(LEGACY_ID_LIST.match(classes))


def split_classes(classes: Optional[str]) -> List[str]:
    if not classes:
        return []
    return [part.strip() for part in classes.split(",")]


def join_classes(names: Iterable[str]) -> str:
    return ",".join(names)


class ResponseFormatter:
    """Formateador de respuestas estándar"""

    @staticmethod
    def success(data: Any, message: str = "Operación exitosa") -> Dict[str, Any]:
        return {"success": True, "message": message, "data": data}
