import re
from datetime import date

from musicals.render import date_text, price_text, render_admin, render_index

TODAY = date(2025, 6, 1)


def test_date_text(make_musical):
    assert date_text(make_musical(start_date=date(2025, 6, 4), end_date=date(2025, 6, 4)), TODAY) == "Only on 4 Jun 2025"
    assert date_text(make_musical(end_date=date(2025, 12, 31)), TODAY) == "Until 31 Dec 2025"
    assert date_text(make_musical(end_date=None), TODAY) == "Open run"
    assert date_text(make_musical(start_date=date(2025, 7, 1), end_date=date(2025, 8, 1)), TODAY) == \
        "From 1 Jul 2025 until 1 Aug 2025"
    assert date_text(make_musical(start_date=date(2025, 7, 1), end_date=None), TODAY) == "From 1 Jul 2025"


def test_price_text(make_musical):
    assert price_text(make_musical(price_from=29.5)) == "From £29.50"
    assert price_text(make_musical(price_from=None)) == ""


def test_index_page_defaults_to_three_month_window(make_musical):
    html = render_index([make_musical()], {"title": "London Musicals"}, today=TODAY)
    assert "<title>London Musicals</title>" in html
    assert 'const defaultDate = "2025-06-01"' in html
    assert 'const defaultEndDate = "2025-09-01"' in html
    assert "Until 31 Dec 2025" in html


def test_index_page_escapes_listing_text(make_musical):
    html = render_index([make_musical(title="</script><b>Boom</b>")], {}, today=TODAY)
    script = re.search(r"const allMusicals = (.*?);\n", html).group(1)
    assert "</script>" not in script
    assert "<b>" not in script


def test_admin_page_lists_types(make_musical):
    html = render_admin([make_musical()], {}, today=TODAY)
    for show_type in ("West End", "Off West End", "Drama School"):
        assert f'<option value="{show_type}">' in html
    assert '"status": "Active"' in html
