from datetime import date

from musicals.csv_io import EXPORT_COLUMNS, export_csv, parse_csv, template_csv


def test_parse_csv_basic():
    text = (
        "Title, Venue_Name ,TYPE,start_date,price_from\n"
        "Wicked,Apollo Victoria,West End,2006-09-27,29.50\n"
        "\n"
        "Rent,Mountview,Drama School,2025-03-01,\n"
    )
    rows = parse_csv(text)
    assert rows == [
        {"title": "Wicked", "venue_name": "Apollo Victoria", "type": "West End",
         "start_date": "2006-09-27", "price_from": "29.50"},
        {"title": "Rent", "venue_name": "Mountview", "type": "Drama School",
         "start_date": "2025-03-01", "price_from": ""},
    ]


def test_parse_csv_quotes_and_escaped_quotes():
    text = (
        'title,venue_address,schedule\n'
        '"Cabaret","Northumberland Ave, London","{""mon"":{""m"":null,""e"":""19:30""}}"\n'
    )
    [row] = parse_csv(text)
    assert row["venue_address"] == "Northumberland Ave, London"
    assert row["schedule"] == '{"mon":{"m":null,"e":"19:30"}}'


def test_parse_csv_pads_short_rows_and_strips_bom():
    [row] = parse_csv("\ufefftitle,venue_name,type\nGrease , LAMDA\n")
    assert row == {"title": "Grease", "venue_name": "LAMDA", "type": ""}


def test_parse_csv_needs_header_and_data():
    assert parse_csv("") == []
    assert parse_csv("title,venue_name\n") == []


def test_export_csv(make_musical):
    m = make_musical(
        run_id="wicked-apollo-victoria-theatre-2025-01-01",
        venue_address='Wilton Road, "Victoria"',
        price_from=29.5,
        end_date=None,
    )
    lines = export_csv([m]).splitlines()
    assert lines[0] == ",".join(EXPORT_COLUMNS)
    assert lines[1] == (
        'wicked-apollo-victoria-theatre-2025-01-01,Wicked,Apollo Victoria Theatre,'
        '"Wilton Road, ""Victoria""",West End,2025-01-01,,,,29.5,,,,,'
    )


def test_export_then_parse_keeps_run_id(make_musical):
    m = make_musical(run_id="custom-id", start_date=date(2025, 2, 1))
    [row] = parse_csv(export_csv([m]))
    assert row["run_id"] == "custom-id"
    assert row["start_date"] == "2025-02-01"


def test_template_has_no_run_id_column():
    [example] = parse_csv(template_csv())
    assert "run_id" not in example
    assert example["type"] == "West End"
    assert example["schedule"] == '{"mon":{"m":null,"e":"19:30"}}'
