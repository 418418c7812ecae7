"""Tests for profile storage and presentation."""

import os
import tempfile
import unittest
from datetime import date

from lockerlink.db import init_db
from lockerlink.models import SchemaError, UserProfile
from lockerlink.profile_store import (
    delete_profile,
    get_profile,
    is_profile_complete,
    list_profiles,
    save_profile,
    search_profiles,
    update_profile,
)
from lockerlink.profile_view import (
    athlete_filter_options,
    athlete_stat_cards,
    calculate_age,
    coach_info_cards,
    filter_athletes,
    format_profile_card,
    mentor_cards,
    stat_cards_for,
)


def complete_profile(**overrides) -> UserProfile:
    values = dict(
        uid="u1", name="Kai Lee", username="kai", team="Spikers", city="Austin",
        position="Outside Hitter", sport="Volleyball", birth_month="March", birth_year="2008",
    )
    values.update(overrides)
    return UserProfile(**values)


class TestProfileStore(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")
        init_db(self.db_path)

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def test_save_and_get(self):
        save_profile(complete_profile(height="6'2\""), self.db_path)
        loaded = get_profile("u1", self.db_path)
        self.assertEqual(loaded.name, "Kai Lee")
        self.assertEqual(loaded.height, "6'2\"")
        self.assertEqual(loaded.points, 0)

    def test_get_missing(self):
        self.assertIsNone(get_profile("nobody", self.db_path))

    def test_save_rejects_invalid_type(self):
        with self.assertRaises(SchemaError):
            save_profile(complete_profile(user_type="fan"), self.db_path)

    def test_update(self):
        save_profile(complete_profile(), self.db_path)
        profile = get_profile("u1", self.db_path)
        profile.weight = "180 lbs"
        self.assertTrue(update_profile(profile, self.db_path))
        self.assertEqual(get_profile("u1", self.db_path).weight, "180 lbs")

    def test_update_missing(self):
        self.assertFalse(update_profile(complete_profile(uid="ghost"), self.db_path))

    def test_list_excludes_user(self):
        save_profile(complete_profile(), self.db_path)
        save_profile(complete_profile(uid="u2", name="Ana"), self.db_path)
        names = [p.name for p in list_profiles(db_path=self.db_path)]
        self.assertEqual(names, ["Ana", "Kai Lee"])
        others = list_profiles(exclude_uid="u1", db_path=self.db_path)
        self.assertEqual([p.uid for p in others], ["u2"])

    def test_delete(self):
        save_profile(complete_profile(), self.db_path)
        self.assertTrue(delete_profile("u1", self.db_path))
        self.assertFalse(delete_profile("u1", self.db_path))


class TestProfileComplete(unittest.TestCase):
    def test_complete(self):
        self.assertTrue(is_profile_complete(complete_profile()))

    def test_age_group_instead_of_birth_year(self):
        self.assertTrue(is_profile_complete(complete_profile(birth_year="", age_group="16U")))

    def test_missing_fields(self):
        self.assertFalse(is_profile_complete(None))
        self.assertFalse(is_profile_complete(complete_profile(team="")))
        self.assertFalse(is_profile_complete(complete_profile(birth_year="", age_group="")))


class TestCalculateAge(unittest.TestCase):
    today = date(2026, 10, 19)

    def test_birthday_passed(self):
        self.assertEqual(calculate_age("March", "2008", self.today), 18)

    def test_birthday_month_counts_as_passed(self):
        self.assertEqual(calculate_age("October", "2008", self.today), 18)

    def test_birthday_not_yet(self):
        self.assertEqual(calculate_age("December", "2008", self.today), 17)

    def test_unreadable(self):
        self.assertIsNone(calculate_age("", "2008", self.today))
        self.assertIsNone(calculate_age("Smarch", "2008", self.today))
        self.assertIsNone(calculate_age("March", "soon", self.today))

    def test_future_year(self):
        self.assertIsNone(calculate_age("March", "2030", self.today))


class TestStatCards(unittest.TestCase):
    def test_athlete_cards_use_formatters(self):
        cards = dict(athlete_stat_cards(complete_profile(
            height="6'2\"", weight="250 lbs", spike_touch="10'2\"", points=35,
        )))
        self.assertEqual(cards["Birth"], "Mar 2008")
        self.assertEqual(cards["Height"], "6'2\" (188 cm)")
        self.assertEqual(cards["Vertical"], "—")
        self.assertEqual(cards["Weight"], "250 lbs (113 kg)")
        self.assertEqual(cards["Spike Touch"], "10'2\" (310 cm)")
        self.assertEqual(cards["Points"], "35")

    def test_athlete_without_birth(self):
        cards = dict(athlete_stat_cards(complete_profile(birth_month="")))
        self.assertEqual(cards["Birth"], "—")

    def test_coach_cards_skip_empty(self):
        coach = UserProfile(uid="c1", name="Coach", user_type="coach", team="Spikers")
        self.assertEqual(coach_info_cards(coach, 3), [("TEAM", "Spikers"), ("Community Posts", "3")])

    def test_mentor_cards(self):
        mentor = UserProfile(uid="m1", name="Mo", user_type="mentor", university="UT", experience_years=4)
        self.assertEqual(mentor_cards(mentor), [("University", "UT"), ("Experience", "4 years")])

    def test_dispatch_by_type(self):
        coach = UserProfile(uid="c1", name="Coach", user_type="coach")
        self.assertEqual(stat_cards_for(coach, 2), [("Community Posts", "2")])
        admin = UserProfile(uid="a1", name="Admin", user_type="admin")
        self.assertEqual(stat_cards_for(admin)[0][0], "Birth")

    def test_profile_card_text(self):
        text = format_profile_card(complete_profile(height="72"))
        self.assertIn("Kai Lee (@kai)", text)
        self.assertIn('72" (183 cm)', text)

class TestSearchProfiles(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")
        init_db(self.db_path)
        save_profile(complete_profile(), self.db_path)
        save_profile(complete_profile(uid="u2", name="Ana Ruiz", team="Dig Deep", city="Dallas",
                                      position="Libero"), self.db_path)
        save_profile(UserProfile(uid="u3", name="Coach Bo", user_type="coach"), self.db_path)

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def uids(self, query, **kwargs):
        return [p.uid for p in search_profiles(query, db_path=self.db_path, **kwargs)]

    def test_matches_each_field_ignoring_case(self):
        self.assertEqual(self.uids("kai"), ["u1"])
        self.assertEqual(self.uids("SPIKERS"), ["u1"])
        self.assertEqual(self.uids("libero"), ["u2"])
        self.assertEqual(self.uids("dallas"), ["u2"])

    def test_substring_across_users(self):
        self.assertEqual(self.uids("a"), ["u2", "u3", "u1"])

    def test_blank_query(self):
        self.assertEqual(self.uids("   "), [])

    def test_exclude_self(self):
        self.assertEqual(self.uids("kai", exclude_uid="u1"), [])


class TestFilterAthletes(unittest.TestCase):
    today = date(2026, 10, 19)

    def setUp(self):
        self.profiles = [
            complete_profile(),  # 18, Austin, Outside Hitter
            complete_profile(uid="u2", name="Ana", city="Dallas", position="Libero",
                             birth_month="January", birth_year="2012"),  # 14
            complete_profile(uid="u3", name="Noa", birth_year=""),  # age unknown
            UserProfile(uid="c1", name="Coach", user_type="coach", city="Austin"),
        ]

    def uids(self, **filters):
        return [p.uid for p in filter_athletes(self.profiles, today=self.today, **filters)]

    def test_no_filters_keeps_athletes_only(self):
        self.assertEqual(self.uids(), ["u1", "u2", "u3"])

    def test_city_and_position(self):
        self.assertEqual(self.uids(city="Austin"), ["u1", "u3"])
        self.assertEqual(self.uids(position="Libero"), ["u2"])
        self.assertEqual(self.uids(city="Austin", position="Libero"), [])

    def test_age_range(self):
        self.assertEqual(self.uids(min_age=15), ["u1"])
        self.assertEqual(self.uids(max_age=14), ["u2"])
        self.assertEqual(self.uids(min_age=14, max_age=18), ["u1", "u2"])

    def test_filter_options(self):
        cities, positions = athlete_filter_options(self.profiles)
        self.assertEqual(cities, ["Austin", "Dallas"])
        self.assertEqual(positions, ["Libero", "Outside Hitter"])



if __name__ == "__main__":
    unittest.main()
