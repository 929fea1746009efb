"""Scene descriptions and world construction.

A scene description is the parsed, renderer-independent form of a scene:
named materials plus a list of shapes that refer to materials by name. The
JSON form mirrors that layout with externally tagged variants:

    {
        "materials": {
            "ground": {"lambertian": {"albedo": [0.8, 0.8, 0.0]}},
            "chrome": {"metal": {"albedo": [0.8, 0.8, 0.8], "fuzz": 0.3}}
        },
        "shapes": [
            {"sphere": {"center": [0, -100.5, -1], "radius": 100, "material": "ground"}},
            {"sphere": {"center": [0, 0, -1], "radius": 0.5, "material": "chrome"}}
        ]
    }

Building the World resolves every material name; a dangling reference is a
fatal configuration error raised before any rendering starts.

Example:
    >>> from photonr.scene.description import load_scene, build_world
    >>> scene = load_scene("scene.json")
    >>> world = build_world(scene)
"""

from __future__ import annotations

import codecs
import json
import logging
import math
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any

from photonr.core.ray import Vec3, vec3
from photonr.geometry.sphere import Sphere
from photonr.materials import LambertianMaterial, Material, MetalMaterial
from photonr.scene.world import Entity, World

logger = logging.getLogger(__name__)

# Longest BOMs first so UTF-32 LE is not mistaken for UTF-16 LE
_BOMS = (
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


class SceneError(ValueError):
    """Raised when a scene description is malformed or inconsistent."""


@dataclass
class SphereShape:
    """A sphere as it appears in a scene description.

    Attributes:
        center: The center of the sphere as (x, y, z).
        radius: The radius of the sphere.
        material: Name of the material in the scene's material table.
    """

    center: tuple[float, float, float]
    radius: float
    material: str


@dataclass
class SceneDescription:
    """A parsed scene.

    Attributes:
        materials: Material table keyed by name.
        shapes: Shapes in scene order.
    """

    materials: dict[str, Material] = field(default_factory=dict)
    shapes: list[SphereShape] = field(default_factory=list)


# =============================================================================
# Parsing
# =============================================================================


def _parse_vector(value: Any, what: str) -> tuple[float, float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise SceneError(f"{what} must be a list of 3 numbers, got {value!r}")
    try:
        x, y, z = (float(component) for component in value)
    except (TypeError, ValueError) as e:
        raise SceneError(f"{what} must be a list of 3 numbers, got {value!r}") from e
    if not all(math.isfinite(c) for c in (x, y, z)):
        raise SceneError(f"{what} must be finite, got {value!r}")
    return (x, y, z)


def _unwrap_tagged(value: Any, what: str) -> tuple[str, dict[str, Any]]:
    """Split an externally tagged variant {"tag": {...}} into (tag, body)."""
    if not isinstance(value, dict) or len(value) != 1:
        raise SceneError(f"{what} must be an object with exactly one variant key, got {value!r}")
    ((tag, body),) = value.items()
    if not isinstance(body, dict):
        raise SceneError(f"{what} '{tag}' must be an object, got {body!r}")
    return tag.lower(), body


def material_from_dict(name: str, data: Any) -> Material:
    """Build a material from its tagged JSON form.

    Raises:
        SceneError: If the variant is unknown or its parameters are invalid.
    """
    tag, body = _unwrap_tagged(data, f"Material '{name}'")
    albedo = _parse_vector(body.get("albedo"), f"Material '{name}' albedo")

    try:
        if tag == "lambertian":
            return LambertianMaterial(albedo=albedo)
        elif tag == "metal":
            return MetalMaterial(albedo=albedo, fuzz=float(body.get("fuzz", 0.0)))
    except (TypeError, ValueError) as e:
        raise SceneError(f"Material '{name}': {e}") from e

    raise SceneError(f"Material '{name}' has unknown type: {tag}")


def shape_from_dict(index: int, data: Any) -> SphereShape:
    """Build a shape from its tagged JSON form.

    Raises:
        SceneError: If the variant is unknown or its fields are invalid.
    """
    tag, body = _unwrap_tagged(data, f"Shape {index}")
    if tag != "sphere":
        raise SceneError(f"Shape {index} has unknown type: {tag}")

    center = _parse_vector(body.get("center"), f"Shape {index} center")
    try:
        radius = float(body["radius"])
    except (KeyError, TypeError, ValueError) as e:
        raise SceneError(f"Shape {index} needs a numeric radius") from e

    material = body.get("material")
    if not isinstance(material, str):
        raise SceneError(f"Shape {index} needs a material name, got {material!r}")

    return SphereShape(center=center, radius=radius, material=material)


def scene_from_dict(data: dict[str, Any]) -> SceneDescription:
    """Load a scene description from a dictionary.

    Args:
        data: Dictionary with 'materials' and 'shapes' keys.

    Returns:
        The parsed scene description.

    Raises:
        SceneError: If the document is malformed.
    """
    if not isinstance(data, dict):
        raise SceneError(f"Scene must be a JSON object, got {type(data).__name__}")

    raw_materials = data.get("materials", {})
    raw_shapes = data.get("shapes", [])
    if not isinstance(raw_materials, dict):
        raise SceneError("'materials' must be an object mapping names to materials")
    if not isinstance(raw_shapes, list):
        raise SceneError("'shapes' must be a list")

    materials = {name: material_from_dict(name, value) for name, value in raw_materials.items()}
    shapes = [shape_from_dict(i, value) for i, value in enumerate(raw_shapes)]
    return SceneDescription(materials=materials, shapes=shapes)


def detect_encoding(raw: bytes) -> str:
    """Pick a text encoding from the byte order mark, defaulting to UTF-8."""
    for bom, encoding in _BOMS:
        if raw.startswith(bom):
            logger.debug("Detected %s byte order mark", encoding)
            return encoding
    return "utf-8"


def load_scene(path: str | PathLike[str]) -> SceneDescription:
    """Read and parse a JSON scene file.

    Files written with a byte order mark (UTF-16 from Windows editors, for
    instance) are decoded according to the mark.

    Args:
        path: Location of the scene file.

    Returns:
        The parsed scene description.

    Raises:
        OSError: If the file cannot be read.
        SceneError: If the file is not a valid scene document.
    """
    raw = Path(path).read_bytes()
    encoding = detect_encoding(raw)
    try:
        data = json.loads(raw.decode(encoding))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SceneError(f"Failed to read scene '{path}': {e}") from e
    return scene_from_dict(data)


# =============================================================================
# World construction
# =============================================================================


def build_world(scene: SceneDescription) -> World:
    """Create the render World for a scene description.

    Each shape becomes one Entity; entities that name the same material share
    the same material instance.

    Raises:
        SceneError: If a shape refers to a material that does not exist, or a
            shape's geometry is invalid.
    """
    world = World()
    for index, shape in enumerate(scene.shapes):
        material = scene.materials.get(shape.material)
        if material is None:
            raise SceneError(f"Shape {index} refers to unknown material '{shape.material}'")

        center: Vec3 = vec3(*shape.center)
        try:
            sphere = Sphere(center=center, radius=shape.radius)
        except ValueError as e:
            raise SceneError(f"Shape {index}: {e}") from e
        world.add(Entity(sphere=sphere, material=material))

    logger.debug(
        "Built world with %d entities and %d materials", len(world), len(scene.materials)
    )
    return world
