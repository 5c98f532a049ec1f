import zipfile

from irrigplan.cli import main

CYCLE_DAYS = 120
SETTINGS = 11


def _sheet_xml(rows):
    body = "".join(
        f'<row r="{r}">'
        + "".join(f'<c r="{col}{r}"><v>{value}</v></c>' for col, value in cells.items())
        + "</row>"
        for r, cells in rows.items()
    )
    return f'<?xml version="1.0" encoding="UTF-8"?><worksheet><sheetData>{body}</sheetData></worksheet>'


def _write_workbook(path, lc):
    cycle = {
        day + 2: {"A": day + 1, "B": 1.0, "C": 1.0, "D": 10.0, "E": lc}
        for day in range(CYCLE_DAYS)
    }
    perc = {p + 2: {"C": float(p), "D": float(p), "E": p} for p in range(SETTINGS)}
    workbook = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<workbook xmlns:r="urn:rel"><sheets>'
        '<sheet name="ciclo" sheetId="1" r:id="rId1"/>'
        '<sheet name="perc" sheetId="2" r:id="rId2"/>'
        "</sheets></workbook>"
    )
    rels = (
        '<?xml version="1.0" encoding="UTF-8"?><Relationships>'
        '<Relationship Id="rId1" Target="worksheets/sheet1.xml"/>'
        '<Relationship Id="rId2" Target="worksheets/sheet2.xml"/>'
        "</Relationships>"
    )
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("xl/workbook.xml", workbook)
        archive.writestr("xl/_rels/workbook.xml.rels", rels)
        archive.writestr("xl/worksheets/sheet1.xml", _sheet_xml(cycle))
        archive.writestr("xl/worksheets/sheet2.xml", _sheet_xml(perc))
    return path


def test_feasible_instance_report(tmp_path, capsys):
    path = _write_workbook(tmp_path / "plan.xlsx", lc=5.0)
    code = main([str(path), "--time-limit", "60"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Solucao encontrada!" in out
    assert "FO: 0\n" in out
    assert "Solution Cost (Exato): R$0\n" in out
    assert "Solution validation: is valid" in out
    assert f"Total day evaluated: {CYCLE_DAYS}" in out


def test_heuristic_output_lists_every_day(tmp_path, capsys):
    path = _write_workbook(tmp_path / "plan.xlsx", lc=5.0)
    main([str(path), "--time-limit", "60"])
    out = capsys.readouterr().out
    line = next(l for l in out.splitlines() if l.startswith("Solution Output: [ "))
    values = line[len("Solution Output: [ ") : -1].split()
    assert values == ["0"] * CYCLE_DAYS


def test_infeasible_instance_reports_check(tmp_path, capsys):
    path = _write_workbook(tmp_path / "plan.xlsx", lc=100.0)
    code = main([str(path), "--time-limit", "60"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Verificar!!!" in out
    assert "Solucao encontrada!" not in out
    assert "Caixa Preta Solution Output: [ ]" in out


def test_missing_workbook_fails(tmp_path, capsys):
    code = main([str(tmp_path / "missing.xlsx")])
    err = capsys.readouterr().err
    assert code == 1
    assert err.startswith("Error:")