import pytest

from gallerypi.util.timefmt import format_month_label, timestamp_to_year_month


def test_documented_label():
    assert format_month_label(2024, 1) == "Jan 2024"


@pytest.mark.parametrize(
    "month,label",
    [(2, "Feb 2025"), (3, "Mar 2025"), (4, "Apr 2025"), (5, "May 2025")],
)
def test_labels_from_gallery_scenarios(month, label):
    assert format_month_label(2025, month) == label


def test_all_months_have_three_letter_names():
    labels = [format_month_label(2020, m) for m in range(1, 13)]
    assert len(set(labels)) == 12
    assert all(len(label.split()[0]) == 3 for label in labels)


def test_invalid_month_is_unknown():
    assert format_month_label(2024, 13) == "Unk 2024"
    assert format_month_label(2024, 0) == format_month_label(2024, 13)


def test_epoch_timestamp():
    assert timestamp_to_year_month(0) == (1970, 1)


def test_timestamp_round_trip_through_label():
    year, month = timestamp_to_year_month(1700000000)
    assert format_month_label(year, month) == "Nov 2023"


def test_out_of_range_timestamp_falls_back_to_epoch():
    assert timestamp_to_year_month(10**18) == timestamp_to_year_month(0)