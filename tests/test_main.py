import csv

import openpyxl

from main import main, run_extraction


def _write_orders(directory):
    path = directory / "orders.txt"
    path.write_text(
        "Invoice To: John Doe 01712345678 House 5, Road 2, Dhaka 1212 Order ID: 99 Total: ৳970\f"
        "Invoice To: করিম 01812345678 মিরপুর, ঢাকা\nTotal: Tk 1,250.50",
        encoding="utf-8",
    )
    return path


def test_cli_writes_csv(tmp_path):
    source = _write_orders(tmp_path)
    output = tmp_path / "out" / "contacts.csv"

    assert main(["--input", str(source), "--output", str(output), "--quiet"]) == 0

    with open(output, encoding="utf-8-sig", newline="") as f:
        rows = list(csv.DictReader(f))
    assert [(r['Source'], r['Page'], r['Name'], r['Value']) for r in rows] == [
        ("orders.txt", "1", "John Doe", "৳970"),
        ("orders.txt", "2", "করিম", "Tk1250.50"),
    ]


def test_cli_writes_excel_for_a_directory(tmp_path):
    _write_orders(tmp_path)
    output = tmp_path / "contacts.xlsx"

    assert main(["--input", str(tmp_path), "--output", str(output)]) == 0
    assert openpyxl.load_workbook(output).active.max_row == 3


def test_cli_missing_input(tmp_path):
    assert main(["--input", str(tmp_path / "missing.pdf")]) == 1


def test_cli_unsupported_output(tmp_path):
    source = _write_orders(tmp_path)
    assert main(["--input", str(source), "--output", str(tmp_path / "contacts.json")]) == 1


def test_run_extraction_without_saving(tmp_path):
    records = run_extraction(str(_write_orders(tmp_path)), save=False)
    assert [r.phone for r in records] == ["01712345678", "01812345678"]
