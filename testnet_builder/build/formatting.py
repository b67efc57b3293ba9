"""Serialization of the topology descriptor."""

import json
from typing import Callable, Dict

import yaml

from ..models import TopologyDescriptor


def render_yaml(descriptor: TopologyDescriptor) -> str:
    return yaml.dump(descriptor.to_compose(), default_flow_style=False, sort_keys=False)


def render_json(descriptor: TopologyDescriptor) -> str:
    return json.dumps(descriptor.to_compose(), indent=2) + "\n"


FORMATTERS: Dict[str, Callable[[TopologyDescriptor], str]] = {
    "yaml": render_yaml,
    "json": render_json,
}

EXTENSIONS = {
    "yaml": "yml",
    "json": "json",
}


def render_descriptor(descriptor: TopologyDescriptor, fmt: str = "yaml") -> str:
    """
    Serialize a descriptor with the named formatter.

    Raises:
        ValueError: If the format is unknown
    """
    try:
        formatter = FORMATTERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown descriptor format: {fmt}") from None
    return formatter(descriptor)
