from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from lxml import etree

from .models import ChainProgram, ChainStep, ProgramMetadata
from .operations import Operation


def _parse_number(raw: Optional[str], what: str) -> float:
    if raw is None or not raw.strip():
        raise ValueError(f"{what} is required")
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{what} must be numeric, got {raw!r}") from None


def _safe_findtext(element, tag: str, default: str | None = None) -> str | None:
    if element is None:
        return default
    text = element.findtext(tag)
    return text.strip() if text is not None else default


def _parse_steps(root) -> List[ChainStep]:
    node = root.find("steps")
    if node is None:
        return []
    steps = []
    for element in node:
        if not isinstance(element.tag, str):
            # comments and processing instructions
            continue
        operation = Operation.parse(element.tag)
        operand = _parse_number(element.attrib.get("operand") or element.text, f"Operand for step '{element.tag}'")
        steps.append(ChainStep(operation=operation, operand=operand))
    return steps


def load_chain_program(path: Path) -> ChainProgram:
    """Read a ``<chain>`` definition.

    Example::

        <chain id="pricing" initial="100" version="1.0">
          <metadata><description>Net price</description></metadata>
          <steps>
            <divide operand="4"/>
            <subtract operand="5"/>
          </steps>
        </chain>
    """
    tree = etree.parse(str(path))
    root = tree.getroot()
    program_id = root.attrib.get("id")
    if not program_id:
        raise ValueError(f"Chain definition {path} requires an 'id' attribute")
    metadata_element = root.find("metadata")
    return ChainProgram(
        program_id=program_id,
        initial_value=_parse_number(root.attrib.get("initial"), f"Initial value of chain '{program_id}'"),
        steps=_parse_steps(root),
        version=root.attrib.get("version", "1.0"),
        metadata=ProgramMetadata(
            description=_safe_findtext(metadata_element, "description"),
            owner=_safe_findtext(metadata_element, "owner"),
        ),
        path=Path(path),
    )
