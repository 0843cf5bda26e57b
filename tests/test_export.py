import csv
import io

from soilcarbon_intel.export import escape_field, export_csv, format_value, to_csv
from soilcarbon_intel.models import ProcessedPaper
from soilcarbon_intel.rules import CSV_HEADERS


def test_empty_records_produce_nothing(tmp_path):
    target = tmp_path / "out.csv"
    assert to_csv([]) is None
    assert export_csv([], target) is None
    assert not target.exists()

def test_header_line_is_fixed():
    text = to_csv([{"r": 0.9}, {"Title": "Only title"}])
    lines = text.split("\n")
    assert lines[0] == ",".join(CSV_HEADERS)
    assert len(CSV_HEADERS) == 33
    assert len(lines) == 3
    assert not text.endswith("\n")

def test_missing_fields_are_empty_cells():
    line = to_csv([{"Year": 2025}]).split("\n")[1]
    cells = line.split(",")
    assert len(cells) == len(CSV_HEADERS)
    assert cells[0] == "2025"
    assert all(c == "" for c in cells[1:])

def test_comma_values_are_quoted():
    line = to_csv([{"Authors": "Smith, J."}], headers=["Authors"]).split("\n")[1]
    assert line == '"Smith, J."'

def test_quotes_are_doubled():
    line = to_csv([{"Title": 'A "Test" Study'}], headers=["Title"]).split("\n")[1]
    assert line == '"A ""Test"" Study"'

def test_values_without_specials_are_unquoted():
    assert escape_field("Random sampling") == "Random sampling"
    assert escape_field("0-30 cm") == "0-30 cm"

def test_number_formatting():
    assert format_value(None) == ""
    assert format_value(42) == "42"
    assert format_value(20.0) == "20"
    assert format_value(11.5) == "11.5"
    assert format_value(0.1) == "0.1"
    assert format_value(-3.2) == "-3.2"
    assert format_value(True) == "true"

def test_blank_coordinate_after_failed_normalization():
    paper = ProcessedPaper(id="sim-0", raw_text="x", Title="T", Longitude=None, Latitude=12.25)
    row = next(csv.DictReader(io.StringIO(to_csv([paper]))))
    assert row["Longitude"] == ""
    assert row["Latitude"] == "12.25"

def test_round_trip_with_csv_reader():
    records = [
        {
            "Year": 2025,
            "Authors": "Wang, L.; Müller, K.",
            "Title": 'Mapping "soil organic carbon" with vis-NIR',
            "Country": "China",
            "Longitude": 116.4,
            "Latitude": 39.9,
            "Calibration_Model": "PLSR",
            "R2": 0.87,
        },
        {"Title": "Second", "No_Samples_Cal": 120, "RMSE": 2.5},
    ]
    rows = list(csv.DictReader(io.StringIO(to_csv(records))))
    assert len(rows) == 2
    for original, parsed in zip(records, rows):
        for key, value in original.items():
            assert parsed[key] == format_value(value)

def test_export_csv_writes_file(tmp_path):
    target = tmp_path / "soil.csv"
    path = export_csv([{"Title": "T", "Authors": "A, B"}], target)
    assert path == target
    content = target.read_text(encoding="utf-8")
    assert content == to_csv([{"Title": "T", "Authors": "A, B"}])
    assert '"A, B"' in content

def test_float_text_outside_decimal_range():
    assert format_value(1e-7) == "1e-7"
    assert format_value(-1.5e-7) == "-1.5e-7"
    assert format_value(0.00001) == "0.00001"
    assert format_value(1e300) == "1e+300"
    assert format_value(1e21) == "1e+21"
    assert format_value(1e20) == "100000000000000000000"
    assert format_value(float("nan")) == "NaN"
    assert format_value(float("-inf")) == "-Infinity"

def test_export_csv_creates_missing_directories(tmp_path):
    target = tmp_path / "exports" / "2025" / "soil.csv"
    assert export_csv([{"Title": "T"}], target) == target
    lines = target.read_text(encoding="utf-8").split("\n")
    assert lines[1] == ",,T" + "," * (len(CSV_HEADERS) - 3)
