import unittest
from zoneinfo import ZoneInfo

from fleetdesk.core.fuel_csv import (
    FuelCsvLayout,
    classify_fuel_type,
    decode_csv,
    detect_delimiter,
    parse_csv_line,
    parse_currency,
    parse_datetime_br,
    parse_fuel_csv,
)
from fleetdesk.errors import ValidationError
from support import fuel_csv

SAO_PAULO = ZoneInfo("America/Sao_Paulo")


class TestParseCurrency(unittest.TestCase):
    """pt-BR amounts."""

    def test_thousands_and_decimal(self):
        self.assertEqual(parse_currency("1.234,56"), 1234.56)

    def test_plain_decimal(self):
        self.assertEqual(parse_currency("50,00"), 50.0)

    def test_empty_and_invalid_become_zero(self):
        self.assertEqual(parse_currency(""), 0)
        self.assertEqual(parse_currency(None), 0)
        self.assertEqual(parse_currency("abc"), 0)

    def test_negative_becomes_zero(self):
        self.assertEqual(parse_currency("-10,00"), 0)

    def test_trailing_text_is_ignored(self):
        self.assertEqual(parse_currency("12,5 BRL"), 12.5)


class TestParseDateTime(unittest.TestCase):

    def test_local_time_to_utc_instant(self):
        self.assertEqual(parse_datetime_br("05/03/2024 14:30:00", SAO_PAULO), "2024-03-05T17:30:00.000Z")

    def test_missing_time_is_midnight(self):
        self.assertEqual(parse_datetime_br("01/06/2024", SAO_PAULO), "2024-06-01T03:00:00.000Z")

    def test_dash_separators_and_short_time(self):
        self.assertEqual(parse_datetime_br("01-06-2024 08:00", SAO_PAULO), "2024-06-01T11:00:00.000Z")

    def test_invalid_calendar_dates_fail(self):
        self.assertIsNone(parse_datetime_br("32/13/2024", SAO_PAULO))
        self.assertIsNone(parse_datetime_br("31/02/2024", SAO_PAULO))

    def test_incomplete_or_empty_fail(self):
        self.assertIsNone(parse_datetime_br("", SAO_PAULO))
        self.assertIsNone(parse_datetime_br("05/03", SAO_PAULO))
        self.assertIsNone(parse_datetime_br("aa/bb/cccc", SAO_PAULO))


class TestCsvLines(unittest.TestCase):

    def test_delimiter_detection(self):
        self.assertEqual(detect_delimiter("a;b;c"), ";")
        self.assertEqual(detect_delimiter("a,b,c"), ",")
        self.assertEqual(detect_delimiter("abc"), ";")

    def test_quoted_cells(self):
        line = '1;"Silva; Ana";"say ""hi""";'
        self.assertEqual(parse_csv_line(line, ";"), ["1", "Silva; Ana", 'say "hi"', ""])

    def test_latin1_fallback(self):
        self.assertEqual(decode_csv("ÁLCOOL".encode("latin-1")), "ÁLCOOL")
        self.assertEqual(decode_csv("ÁLCOOL".encode("utf-8")), "ÁLCOOL")

    def test_fuel_type_buckets(self):
        self.assertEqual(classify_fuel_type("GASOLINA COMUM"), "gasoline")
        self.assertEqual(classify_fuel_type("Álcool"), "ethanol")
        self.assertEqual(classify_fuel_type("ETANOL"), "ethanol")
        self.assertEqual(classify_fuel_type("DIESEL S10"), "other")
        self.assertEqual(classify_fuel_type(None), "other")


class TestParseFuelCsv(unittest.TestCase):
    """Row admission rules for a whole report."""

    def test_rows_become_records(self):
        data = fuel_csv([
            {"plate": " XYZ9999 ", "cpf": "11111111111", "name": "Ana", "date": "01/06/2024 08:00:00",
             "value": "50,00", "fuel": "GASOLINA"},
        ])
        records = parse_fuel_csv(data, SAO_PAULO)

        self.assertEqual(len(records), 1)
        record = records[0]
        self.assertEqual(record.card_plate, "XYZ9999")
        self.assertEqual(record.driver_cpf, "11111111111")
        self.assertEqual(record.driver_name, "Ana")
        self.assertEqual(record.fuel_type, "GASOLINA")
        self.assertEqual(record.value, 50.0)
        self.assertEqual(record.date_time, "2024-06-01T11:00:00.000Z")

    def test_blank_and_undated_rows_are_dropped(self):
        data = fuel_csv([
            {"date": "01/06/2024 08:00:00", "value": "10,00"},
            {"plate": "AAA1111", "cpf": "1", "name": "X", "date": "32/13/2024", "value": "10,00"},
            {"plate": "BBB2222", "cpf": "2", "name": "Y", "date": "02/06/2024 09:15:00", "value": "1.234,56"},
        ])
        records = parse_fuel_csv(data, SAO_PAULO)
        self.assertEqual([r.card_plate for r in records], ["BBB2222"])
        self.assertEqual(records[0].value, 1234.56)

    def test_comma_delimited_report(self):
        data = fuel_csv(
            [{"plate": "CCC3333", "cpf": "3", "name": "Z", "date": "03/06/2024 10:00:00", "value": "7"}],
            delimiter=",",
        )
        self.assertEqual(len(parse_fuel_csv(data, SAO_PAULO)), 1)

    def test_header_only_yields_nothing(self):
        self.assertEqual(parse_fuel_csv(b"a;b;c\n", SAO_PAULO), [])

    def test_empty_file_is_rejected(self):
        with self.assertRaises(ValidationError):
            parse_fuel_csv(b"", SAO_PAULO)

    def test_custom_layout(self):
        layout = FuelCsvLayout(date_time=0, card_plate=1, driver_cpf=2, driver_name=3, fuel_type=4, value=5)
        data = "h\n01/06/2024 08:00;XYZ9999;111;Ana;ETANOL;20,00\n".encode("utf-8")
        records = parse_fuel_csv(data, SAO_PAULO, layout)
        self.assertEqual(records[0].fuel_type, "ETANOL")
        self.assertEqual(records[0].value, 20.0)


if __name__ == "__main__":
    unittest.main()
