"""Problem data for the irrigation plan and its loading from a workbook."""

from __future__ import annotations

import zipfile
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Union
from xml.etree import ElementTree

CYCLE_SHEET = "ciclo"
PERC_SHEET = "perc"
CYCLE_ROWS = range(2, 122)
PERC_ROWS = range(2, 13)

_CellValue = Union[float, str, bool]


@dataclass
class Instance:
    """Daily climate and soil data plus the available sprinkler settings."""

    cycle: list[float] = field(default_factory=list)
    perc: list[int] = field(default_factory=list)
    cost: list[float] = field(default_factory=list)
    lamp: list[float] = field(default_factory=list)
    prec: list[float] = field(default_factory=list)
    etc: list[float] = field(default_factory=list)
    cad: list[float] = field(default_factory=list)
    lc: list[float] = field(default_factory=list)
    path: str = ""

    @classmethod
    def from_xlsx(cls, path: str | Path) -> Instance:
        """Read an instance from the ``ciclo`` and ``perc`` sheets of a workbook."""
        sheets = _read_sheets(path, (CYCLE_SHEET, PERC_SHEET))
        cycle_cells = sheets[CYCLE_SHEET]
        perc_cells = sheets[PERC_SHEET]
        return cls(
            cycle=_column(cycle_cells, CYCLE_SHEET, "A", CYCLE_ROWS, _as_float),
            prec=_column(cycle_cells, CYCLE_SHEET, "B", CYCLE_ROWS, _as_float),
            etc=_column(cycle_cells, CYCLE_SHEET, "C", CYCLE_ROWS, _as_float),
            cad=_column(cycle_cells, CYCLE_SHEET, "D", CYCLE_ROWS, _as_float),
            lc=_column(cycle_cells, CYCLE_SHEET, "E", CYCLE_ROWS, _as_float),
            perc=_column(perc_cells, PERC_SHEET, "E", PERC_ROWS, _as_int),
            cost=_column(perc_cells, PERC_SHEET, "D", PERC_ROWS, _as_float),
            lamp=_column(perc_cells, PERC_SHEET, "C", PERC_ROWS, _as_float),
            path=str(path),
        )


def load_instance(path: str | Path) -> Instance:
    """Load an instance from the workbook at ``path``."""
    return Instance.from_xlsx(path)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _attr(element: ElementTree.Element, name: str) -> str | None:
    for key, value in element.attrib.items():
        if _local(key) == name:
            return value
    return None


def _read_sheets(path: str | Path, names: Iterable[str]) -> dict[str, dict[str, _CellValue]]:
    with zipfile.ZipFile(path) as archive:
        members = set(archive.namelist())
        workbook = ElementTree.fromstring(archive.read("xl/workbook.xml"))
        rels = ElementTree.fromstring(archive.read("xl/_rels/workbook.xml.rels"))
        targets = {
            rel.get("Id"): rel.get("Target", "")
            for rel in rels.iter()
            if _local(rel.tag) == "Relationship"
        }
        sheet_files: dict[str, str] = {}
        for sheet in workbook.iter():
            if _local(sheet.tag) != "sheet":
                continue
            target = targets.get(_attr(sheet, "id"))
            if target is None:
                continue
            if target.startswith("/"):
                member = target.lstrip("/")
            else:
                member = str(PurePosixPath("xl") / target)
            sheet_files[sheet.get("name", "")] = member

        shared = _shared_strings(archive) if "xl/sharedStrings.xml" in members else []

        result = {}
        for name in names:
            member = sheet_files.get(name)
            if member is None or member not in members:
                raise ValueError(f"workbook has no sheet named {name!r}")
            result[name] = _cells(ElementTree.fromstring(archive.read(member)), shared)
        return result


def _text_of(element: ElementTree.Element) -> str:
    return "".join(t.text or "" for t in element.iter() if _local(t.tag) == "t")


def _shared_strings(archive: zipfile.ZipFile) -> list[str]:
    root = ElementTree.fromstring(archive.read("xl/sharedStrings.xml"))
    return [_text_of(si) for si in root if _local(si.tag) == "si"]


def _cells(root: ElementTree.Element, shared: list[str]) -> dict[str, _CellValue]:
    cells: dict[str, _CellValue] = {}
    for cell in root.iter():
        if _local(cell.tag) != "c":
            continue
        ref = cell.get("r")
        if not ref:
            continue
        kind = cell.get("t", "n")
        if kind == "inlineStr":
            cells[ref.upper()] = _text_of(cell)
            continue
        raw = next((child.text for child in cell if _local(child.tag) == "v"), None)
        if raw is None:
            continue
        if kind == "s":
            cells[ref.upper()] = shared[int(raw)]
        elif kind == "b":
            cells[ref.upper()] = raw.strip() == "1"
        elif kind in ("str", "e"):
            cells[ref.upper()] = raw
        else:
            cells[ref.upper()] = float(raw)
    return cells


def _as_float(value: _CellValue) -> float:
    if isinstance(value, bool) or not isinstance(value, float):
        raise TypeError(f"expected a number, found {value!r}")
    return value


def _as_int(value: _CellValue) -> int:
    number = _as_float(value)
    if not number.is_integer():
        raise TypeError(f"expected an integer, found {number!r}")
    return int(number)


def _column(
    cells: dict[str, _CellValue],
    sheet: str,
    col: str,
    rows: range,
    convert: Callable[[_CellValue], float | int],
) -> list:
    values = []
    for row in rows:
        ref = f"{col}{row}"
        if ref not in cells:
            raise ValueError(f"cell {sheet}!{ref} is empty")
        try:
            values.append(convert(cells[ref]))
        except TypeError as exc:
            raise ValueError(f"cell {sheet}!{ref}: {exc}") from exc
    return values