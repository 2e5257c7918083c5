"""Helpers for mapping persisted keys onto model field names."""

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel


def field_names(model: type[BaseModel]) -> dict[str, str]:
    """Map every key accepted by ``model`` to its Python field name.

    Covers the field name itself, its alias and any validation alias
    choices (e.g. ``dateAdded`` -> ``date_added``).

    Args:
        model: The pydantic model class to inspect.

    Returns:
        Dictionary from accepted input key to field name.
    """
    names: dict[str, str] = {}
    for name, info in model.model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name
        validation_alias = info.validation_alias
        if isinstance(validation_alias, str):
            names[validation_alias] = name
        elif isinstance(validation_alias, AliasChoices):
            for choice in validation_alias.choices:
                if isinstance(choice, str):
                    names[choice] = name
    return names


def canonicalize(model: type[BaseModel], data: Mapping[str, Any]) -> dict[str, Any]:
    """Rename the keys of ``data`` to ``model`` field names.

    Unknown keys are passed through unchanged so pydantic can ignore them.
    """
    names = field_names(model)
    return {names.get(key, key): value for key, value in data.items()}
