"""Helpers to reduce repetitive Flasgger/Swagger doc declarations.

Views are marked with decorators; `apply_swagger_extras(app)` then rewrites
their docstrings once, after blueprints are registered and before Flasgger
builds the spec.
"""
from typing import Callable
from pathlib import Path
import json
import textwrap
import yaml


PAGINATION_YAML = """
parameters:
  - in: query
    name: page
    schema:
      type: integer
    description: Page number (1-based)
  - in: query
    name: pageSize
    schema:
      type: integer
    description: Number of items per page
  - in: query
    name: sortBy
    schema:
      type: string
    description: Field to sort by
  - in: query
    name: sortOrder
    schema:
      type: string
    description: Sort order (asc|desc)
"""

MARKER = "# __swagger_extras_injected__"


def with_pagination(func: Callable) -> Callable:
    """Mark a view as accepting the shared pagination query parameters."""
    setattr(func, "__add_pagination__", True)
    return func


def with_example_file(path: str):
    """Attach a JSON example body (path relative to the app root) to a view."""

    def _decorator(func: Callable) -> Callable:
        setattr(func, "__swagger_example_file__", path)
        return func

    return _decorator


def _get_attr_from_wrapped(obj, name):
    cur = obj
    for _ in range(10):
        if cur is None:
            return None
        if hasattr(cur, name):
            return getattr(cur, name)
        cur = getattr(cur, "__wrapped__", None)
    return None


def _load_example(app, example_file: str):
    p = Path(example_file)
    candidates = [p] if p.is_absolute() else [
        Path(app.root_path) / example_file,
        Path(app.root_path) / "api" / "examples" / p.name,
    ]
    for cand in candidates:
        if cand.exists():
            with open(cand, "r", encoding="utf-8") as fh:
                return json.load(fh)
    app.logger.debug("swagger example file not found: %s", example_file)
    return None


def _split_doc(doc: str):
    if "---" not in doc:
        return doc, {}
    sep = doc.find("---")
    parsed = yaml.safe_load(textwrap.dedent(doc[sep + 3:])) or {}
    return doc[:sep], parsed if isinstance(parsed, dict) else {}


def _merge_pagination(spec: dict) -> None:
    extra = yaml.safe_load(PAGINATION_YAML)["parameters"]
    seen = set()
    merged = []
    for param in extra + spec.get("parameters", []):
        key = (param.get("in"), param.get("name"))
        if key not in seen:
            seen.add(key)
            merged.append(param)
    spec["parameters"] = merged


def _inject_example(spec: dict, example) -> None:
    params = spec.setdefault("parameters", [])
    body = next((p for p in params if p.get("in") == "body"), None)
    if body is None:
        body = {"in": "body", "name": "body", "required": True, "schema": {"type": "object"}}
        params.append(body)
    body.setdefault("schema", {"type": "object"})["example"] = example


def apply_swagger_extras(app):
    """Inject pagination parameters and example bodies into marked views.

    Idempotent: docstrings already carrying MARKER are skipped.
    """
    for endpoint, view in list(app.view_functions.items()):
        if endpoint.startswith("static"):
            continue
        doc = view.__doc__ or ""
        if MARKER in doc:
            continue

        has_pagination = bool(_get_attr_from_wrapped(view, "__add_pagination__"))
        example_file = _get_attr_from_wrapped(view, "__swagger_example_file__")
        if not has_pagination and not example_file:
            continue

        try:
            pre, spec = _split_doc(doc)
            if has_pagination:
                _merge_pagination(spec)
            example = _load_example(app, example_file) if example_file else None
            if example is not None:
                _inject_example(spec, example)
        except (yaml.YAMLError, json.JSONDecodeError, OSError) as e:
            app.logger.warning("swagger extras skipped for %s: %s", endpoint, e)
            continue

        view.__doc__ = pre.rstrip() + "\n\n---\n" + MARKER + "\n" + yaml.safe_dump(spec, sort_keys=False, allow_unicode=True)
