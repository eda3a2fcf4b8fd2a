"""Parse the bundled public prompt collections into records.

The documents follow an informal layout::

    ### <category>
    - **角色/类别**: <role>
    **提示词**: <prompt text, possibly several lines>
    - **角色/类别**: <next role>
    ...

Parsing never raises on malformed input. Structural problems are reported
through `ParseResult.warnings` so callers can tell an empty collection from a
document that did not match the expected layout.
"""
from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class PromptMarkers:
    heading: str = "### "
    role: str = "- **角色/类别**: "
    prompt: str = "**提示词**:"


# Both bundled documents currently use the Chinese labels. Keep one entry
# per language so a differently formatted English document only needs a
# new marker set here.
MARKERS_BY_LANGUAGE = {
    "zh": PromptMarkers(),
    "en": PromptMarkers(),
}


def markers_for(language: str | None) -> PromptMarkers:
    """Return the marker set for `language`, falling back to English."""
    return MARKERS_BY_LANGUAGE.get((language or "").lower(), MARKERS_BY_LANGUAGE["en"])


@dataclass(frozen=True)
class ParsedPromptEntry:
    category: str
    role: str
    prompt: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ParseWarning:
    code: str
    message: str
    category: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ParseResult:
    entries: list[ParsedPromptEntry] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict:
        return {
            "prompts": [e.to_dict() for e in self.entries],
            "total": self.total,
            "warnings": [w.to_dict() for w in self.warnings],
        }


def parse_prompts(text: str, markers: PromptMarkers | None = None) -> ParseResult:
    """Split `text` into `{category, role, prompt}` entries in document order.

    Entries whose role or prompt is empty after trimming are dropped and
    reported as `dropped_entry` warnings.
    """
    markers = markers or PromptMarkers()
    result = ParseResult()

    if not text or not text.strip():
        result.warnings.append(ParseWarning("empty_document", "Document is empty"))
        return result

    # Everything before the first heading is front matter.
    sections = text.split(markers.heading)[1:]
    if not sections:
        result.warnings.append(
            ParseWarning("no_sections", f"No '{markers.heading.strip()}' headings found")
        )
        return result

    for section in sections:
        lines = section.split("\n")
        category = lines[0].strip()
        body = "\n".join(lines[1:])

        blocks = body.split(markers.role)[1:]
        if not blocks:
            result.warnings.append(
                ParseWarning("empty_section", "Section contains no entries", category)
            )
            continue

        for block in blocks:
            block_lines = block.split("\n")
            role = block_lines[0].strip()
            prompt = "\n".join(block_lines[1:]).replace(markers.prompt, "", 1).strip()

            if role and prompt:
                result.entries.append(ParsedPromptEntry(category, role, prompt))
            else:
                missing = "role" if not role else "prompt"
                result.warnings.append(
                    ParseWarning("dropped_entry", f"Entry dropped: empty {missing}", category)
                )

    return result
