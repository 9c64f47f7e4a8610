from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .point_editors import ControlPointEditor

# mode name -> editor class
point_editor_registry: dict[str, type["ControlPointEditor"]] = {}


def register_point_editor(name: str):
    def _decorator(cls: type["ControlPointEditor"]) -> type["ControlPointEditor"]:
        if not name or name in point_editor_registry:
            raise ValueError(f"Invalid or duplicate point editor name '{name}'")
        cls.name = name
        point_editor_registry[name] = cls
        return cls
    return _decorator


def create_point_editor(name: str) -> "ControlPointEditor":
    """Fresh editor instance for the curve mode called `name`."""
    try:
        editor_cls = point_editor_registry[name]
    except KeyError:
        known = ", ".join(sorted(point_editor_registry)) or "none"
        raise ValueError(f"No point editor registered for mode '{name}' (known: {known})") from None
    return editor_cls()
