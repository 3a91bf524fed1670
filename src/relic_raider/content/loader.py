from __future__ import annotations
import tomllib
from pathlib import Path
from typing import Any

from relic_raider.mechanics.skills import classify_skill_entry

CONTENT_DIR = Path(__file__).parent

def load_toml(filepath: Path) -> dict[str, Any]:
    with open(filepath, "rb") as f:
        return tomllib.load(f)

def load_all_zones(content_dir: Path = CONTENT_DIR) -> list[dict]:
    """Zones in progression order, as listed in zones.toml."""
    return load_toml(content_dir / "zones.toml").get("zones", [])

def load_all_items(content_dir: Path = CONTENT_DIR) -> dict[str, dict]:
    items = {}
    for item in load_toml(content_dir / "items.toml").get("items", []):
        items[item["id"]] = item
    return items

def load_all_classes(content_dir: Path = CONTENT_DIR) -> dict[str, dict]:
    classes = {}
    for cls in load_toml(content_dir / "classes.toml").get("classes", []):
        classes[cls["name"]] = cls
    return classes

def load_all_equipment(content_dir: Path = CONTENT_DIR) -> dict[str, dict]:
    equipment = {}
    for gear in load_toml(content_dir / "equipment.toml").get("equipment", []):
        equipment[gear["id"]] = gear
    return equipment

def load_loadouts(content_dir: Path = CONTENT_DIR) -> dict[str, dict]:
    path = content_dir / "loadouts.toml"
    if not path.exists():
        return {}
    return load_toml(path)


def load_all_opponents(content_dir: Path = CONTENT_DIR) -> list[dict[str, Any]]:
    """Load every opponent from content/opponents/*.toml.

    Each file names its ``zone`` at the top level; entries inherit it unless
    they carry their own.
    """
    opponents: list[dict[str, Any]] = []
    for f in sorted((content_dir / "opponents").glob("*.toml")):
        data = load_toml(f)
        zone = data.get("zone")
        for opponent in data.get("opponents", []):
            opponent.setdefault("zone", zone)
            opponents.append(opponent)
    return opponents


def load_all_skills(content_dir: Path = CONTENT_DIR) -> dict[str, dict]:
    """Load every skill from content/skills/*.toml.

    Entries keep the catalog's ``type`` key, which is renamed to
    ``skill_type`` here. Entries without an explicit ``effect_kind`` are
    classified from their name and description.
    """
    skills = {}
    for f in sorted((content_dir / "skills").glob("*.toml")):
        data = load_toml(f)
        class_name = data.get("class_name")
        for skill in data.get("skills", []):
            if "type" in skill:
                skill["skill_type"] = skill.pop("type").upper()
            skill.setdefault("class_name", class_name)
            skills[skill["id"]] = classify_skill_entry(skill)
    return skills
