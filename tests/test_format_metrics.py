"""Tests for measurement display formatting."""

import math
import unittest

from lockerlink.format_metrics import (
    IMPERIAL,
    METRIC,
    UNMARKED,
    classify_unit,
    format_height,
    format_number,
    format_touch,
    format_vertical,
    format_weight,
    number_at,
    parse_numbers,
    pounds_to_kg,
    round_half_up,
)

FORMATTERS = (format_height, format_vertical, format_weight, format_touch)


class TestParser(unittest.TestCase):
    def test_numbers_in_order(self):
        self.assertEqual(parse_numbers("6'2\""), [6.0, 2.0])
        self.assertEqual(parse_numbers("5 ft 11.5 in"), [5.0, 11.5])

    def test_no_numbers(self):
        self.assertEqual(parse_numbers("tall"), [])

    def test_sign_not_consumed(self):
        self.assertEqual(parse_numbers("-5.5 in"), [5.5])

    def test_missing_index_is_nan(self):
        self.assertTrue(math.isnan(number_at([], 0)))
        self.assertTrue(math.isnan(number_at([6.0], 1)))
        self.assertEqual(number_at([6.0, 2.0], 1), 2.0)


class TestClassifier(unittest.TestCase):
    def test_height(self):
        self.assertEqual(classify_unit("185 cm", "height"), METRIC)
        self.assertEqual(classify_unit("185 CM", "height"), METRIC)
        self.assertEqual(classify_unit("6'2\"", "height"), IMPERIAL)
        self.assertEqual(classify_unit("6 feet", "height"), IMPERIAL)
        self.assertEqual(classify_unit("72", "height"), UNMARKED)

    def test_vertical(self):
        self.assertEqual(classify_unit("70cm", "vertical"), METRIC)
        self.assertEqual(classify_unit("30 inches", "vertical"), IMPERIAL)
        self.assertEqual(classify_unit("30", "vertical"), UNMARKED)

    def test_weight(self):
        self.assertEqual(classify_unit("80 kg", "weight"), METRIC)
        self.assertEqual(classify_unit("180 LBS", "weight"), IMPERIAL)
        self.assertEqual(classify_unit("180 pounds", "weight"), IMPERIAL)
        self.assertEqual(classify_unit("180", "weight"), UNMARKED)


class TestConverter(unittest.TestCase):
    def test_round_half_up(self):
        # Python's round() would give 2 here
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.25, 1), 0.3)

    def test_pounds_to_kg_threshold(self):
        self.assertEqual(pounds_to_kg(180), 81.6)
        self.assertEqual(pounds_to_kg(220), 99.8)
        self.assertEqual(pounds_to_kg(221), 100)
        self.assertEqual(pounds_to_kg(250), 113)

    def test_format_number(self):
        self.assertEqual(format_number(72.0), "72")
        self.assertEqual(format_number(81.6), "81.6")


class TestAbsentInput(unittest.TestCase):
    def test_placeholder_for_absent_values(self):
        for formatter in FORMATTERS:
            for raw in (None, "", "   ", "\t\n"):
                self.assertEqual(formatter(raw), "—", f"{formatter.__name__}({raw!r})")


class TestFormatHeight(unittest.TestCase):
    def test_metric_unchanged(self):
        self.assertEqual(format_height("185 cm"), "185 cm")
        self.assertEqual(format_height("  185cm "), "185cm")

    def test_feet_and_inches(self):
        # 6 * 30.48 + 2 * 2.54 = 187.96
        self.assertEqual(format_height("6'2\""), "6'2\" (188 cm)")
        self.assertEqual(format_height("6 ft 2 in"), "6 ft 2 in (188 cm)")
        self.assertEqual(format_height("5'11.5\""), "5'11.5\" (182 cm)")

    def test_single_imperial_number(self):
        self.assertEqual(format_height("6'"), "6' (183 cm)")
        self.assertEqual(format_height("6 feet"), "6 feet (183 cm)")
        self.assertEqual(format_height("74 in"), "74 in (188 cm)")
        self.assertEqual(format_height('74"'), '74" (188 cm)')

    def test_bare_number_is_inches_not_metric(self):
        self.assertEqual(format_height("72"), '72" (183 cm)')
        self.assertEqual(format_height(72), '72" (183 cm)')
        self.assertEqual(format_height(72.0), '72" (183 cm)')

    def test_unmarked_pair_is_feet_and_inches(self):
        self.assertEqual(format_height("6-2"), "6-2 (188 cm)")

    def test_text_passthrough(self):
        self.assertEqual(format_height("tall"), "tall")

    def test_output_is_stable(self):
        for raw in ("6'2\"", "72", "185 cm", "tall"):
            once = format_height(raw)
            self.assertEqual(format_height(once), once)


class TestFormatVertical(unittest.TestCase):
    def test_inches_annotated(self):
        self.assertEqual(format_vertical("30 in"), "30 in (76 cm)")
        self.assertEqual(format_vertical('30"'), '30" (76 cm)')

    def test_bare_number(self):
        self.assertEqual(format_vertical(30), '30" (76 cm)')
        self.assertEqual(format_vertical("32.5"), '32.5" (83 cm)')

    def test_metric_unchanged(self):
        self.assertEqual(format_vertical("75 cm"), "75 cm")

    def test_text_passthrough(self):
        self.assertEqual(format_vertical("high"), "high")

    def test_output_is_stable(self):
        once = format_vertical("30")
        self.assertEqual(format_vertical(once), once)


class TestFormatWeight(unittest.TestCase):
    def test_below_threshold_one_decimal(self):
        self.assertEqual(format_weight("180 lbs"), "180 lbs (81.6 kg)")
        self.assertEqual(format_weight("220 lbs"), "220 lbs (99.8 kg)")

    def test_trailing_zero_dropped(self):
        self.assertEqual(format_weight("150 pounds"), "150 pounds (68 kg)")

    def test_at_or_above_threshold_whole_kg(self):
        self.assertEqual(format_weight("250 lbs"), "250 lbs (113 kg)")
        self.assertEqual(format_weight("221 lb"), "221 lb (100 kg)")

    def test_bare_number(self):
        self.assertEqual(format_weight("180"), "180 lbs (81.6 kg)")
        self.assertEqual(format_weight(250), "250 lbs (113 kg)")

    def test_metric_unchanged(self):
        self.assertEqual(format_weight("80 kg"), "80 kg")

    def test_text_passthrough(self):
        self.assertEqual(format_weight("heavy"), "heavy")

    def test_output_is_stable(self):
        once = format_weight("180")
        self.assertEqual(format_weight(once), once)


class TestFormatTouch(unittest.TestCase):
    def test_reach(self):
        # 10 * 30.48 + 2 * 2.54 = 309.88
        self.assertEqual(format_touch("10'2\""), "10'2\" (310 cm)")
        self.assertEqual(format_touch("310 cm"), "310 cm")


class TestNeverRaises(unittest.TestCase):
    def test_odd_inputs(self):
        odd = [float("nan"), float("inf"), "9" * 400, "1e308 ft 5", "1" * 300 + " ft", True, 0, "0", ".", "'\""]
        for formatter in FORMATTERS:
            for raw in odd:
                result = formatter(raw)
                self.assertIsInstance(result, str)
                self.assertTrue(result)

    def test_conversion_overflow_shows_text(self):
        # Finite when parsed, infinite once converted to cm
        huge_height = "9" * 308 + " ft"
        huge_vertical = "9" * 308 + " in"
        self.assertEqual(format_height(huge_height), huge_height)
        self.assertEqual(format_touch(huge_height), huge_height)
        self.assertEqual(format_height("9" * 308), "9" * 308)
        self.assertEqual(format_vertical(huge_vertical), huge_vertical)
        self.assertEqual(format_vertical("9" * 308), "9" * 308)


if __name__ == "__main__":
    unittest.main()
