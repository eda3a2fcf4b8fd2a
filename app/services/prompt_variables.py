"""Helpers for `{{variable}}` placeholders inside prompt content."""
import re

VARIABLE_PATTERN = re.compile(r"\{\{([^}]+)\}\}")
VALID_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")


def extract_variables(text) -> list[str]:
    """Distinct placeholder names in order of first appearance."""
    if not text or not isinstance(text, str):
        return []
    names = []
    for match in VARIABLE_PATTERN.finditer(text):
        name = match.group(1).strip()
        if name and name not in names:
            names.append(name)
    return names


def replace_variables(text, values: dict | None = None):
    """Substitute known placeholders; unknown ones are left untouched."""
    if not text or not isinstance(text, str):
        return text
    values = values or {}

    def _sub(match):
        name = match.group(1).strip()
        if name in values and values[name] is not None:
            return str(values[name])
        return match.group(0)

    return VARIABLE_PATTERN.sub(_sub, text)


def is_valid_variable_name(name) -> bool:
    if not name or not isinstance(name, str):
        return False
    return bool(VALID_NAME_PATTERN.match(name.strip()))


def display_name(name: str) -> str:
    """`user_name` -> `User Name`."""
    if not name:
        return ""
    words = re.sub(r"[_-]", " ", name).split(" ")
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def analyze_prompt_variables(content) -> dict:
    names = extract_variables(content)
    return {
        "has_variables": bool(names),
        "variable_count": len(names),
        "variables": [{"name": n, "display_name": display_name(n)} for n in names],
    }
