"""
Unit tests for FixtureService.

Tests fixture creation and ordering, edits, deletion and the
season/competition history.
"""
import unittest
from unittest.mock import patch

from teamsheet.services import ServiceFactory
from teamsheet.utils.constants import BENCH

TIMER_NOW = "teamsheet.services.timer_service.now_ts"


class TestFixtureService(unittest.TestCase):
    def setUp(self) -> None:
        services = ServiceFactory().create_complete_service_suite()
        self.store = services["store"]
        self.fixtures = services["fixtures"]
        self.roster = services["roster"]
        self.timer = services["timer"]

    def test_add_game_builds_bench_lineup(self) -> None:
        player = self.roster.add_player("Ann", "Lee", "4")

        game = self.fixtures.add_game("City", "2025-02-01", "10:00", "away")

        self.assertEqual(game.opponent, "City")
        self.assertEqual(game.location, "away")
        self.assertEqual(game.timer_status, "stopped")
        self.assertEqual(game.timer_elapsed_seconds, 0)
        self.assertEqual(game.events, [])
        self.assertEqual([e.id for e in game.lineup], [player.id])
        self.assertEqual(game.lineup[0].location, BENCH)

    def test_games_are_kept_in_date_order(self) -> None:
        later = self.fixtures.add_game("Town", "2025-05-01", "10:00", "home")
        earlier = self.fixtures.add_game("City", "2025-04-01", "10:00", "away")

        self.assertEqual([g.id for g in self.store.state.games], [earlier.id, later.id])

        self.fixtures.update_game(earlier.id, date="2025-06-01")
        self.assertEqual([g.id for g in self.store.state.games], [later.id, earlier.id])

    def test_history_tracks_most_recent_tags(self) -> None:
        self.assertIsNone(self.fixtures.get_most_recent_season())

        self.fixtures.add_game("A", "2025-01-01", "", "home", season=" 2024/25 ", competition="League")
        self.fixtures.add_game("B", "2025-01-08", "", "home", season="2025", competition="")
        self.fixtures.add_game("C", "2025-01-15", "", "home", season="2024/25", competition="Cup")

        history = self.store.state.game_history
        self.assertEqual(history.seasons, ["2024/25", "2025"])
        self.assertEqual(history.competitions, ["Cup", "League"])
        self.assertEqual(self.fixtures.get_most_recent_season(), "2024/25")
        self.assertEqual(self.fixtures.get_most_recent_competition(), "Cup")

    def test_update_game_edits_fields_and_history(self) -> None:
        game = self.fixtures.add_game("City", "2025-02-01", "10:00", "home")

        self.fixtures.update_game(game.id, opponent="City Reserves", season=" Spring ")

        updated = self.fixtures.get_game(game.id)
        self.assertEqual(updated.opponent, "City Reserves")
        self.assertEqual(updated.season, "Spring")
        self.assertEqual(self.fixtures.get_most_recent_season(), "Spring")

    def test_update_game_rejects_engine_fields(self) -> None:
        game = self.fixtures.add_game("City", "2025-02-01", "10:00", "home")
        with self.assertRaises(ValueError):
            self.fixtures.update_game(game.id, timer_elapsed_seconds=100)
        with self.assertRaises(ValueError):
            self.fixtures.update_game(game.id, location="neutral")

    def test_clearing_finished_flag_allows_restart(self) -> None:
        game = self.fixtures.add_game("City", "2025-02-01", "10:00", "home")
        self.timer.mark_game_as_finished(game.id)

        with patch(TIMER_NOW, return_value=1000):
            self.timer.start_game_timer(game.id)
        self.assertEqual(self.fixtures.get_game(game.id).timer_status, "stopped")

        self.fixtures.update_game(game.id, is_explicitly_finished=False)
        with patch(TIMER_NOW, return_value=2000):
            self.timer.start_game_timer(game.id)

        restarted = self.fixtures.get_game(game.id)
        self.assertFalse(restarted.is_explicitly_finished)
        self.assertEqual(restarted.timer_status, "running")
        self.assertEqual(restarted.timer_start_time, 2000)

    def test_update_game_checks_value_types(self) -> None:
        game = self.fixtures.add_game("City", "2025-02-01", "10:00", "home")
        with self.assertRaises(ValueError):
            self.fixtures.update_game(game.id, date=5)
        with self.assertRaises(ValueError):
            self.fixtures.update_game(game.id, is_explicitly_finished="no")
        self.assertEqual(self.fixtures.get_game(game.id).date, "2025-02-01")

    def test_add_game_returns_detached_copy(self) -> None:
        self.roster.add_player("Ann", "Lee", "4")
        game = self.fixtures.add_game("City", "2025-02-01", "10:00", "home")

        game.opponent = "Changed"
        game.lineup[0].location = "field"

        committed = self.fixtures.get_game(game.id)
        self.assertEqual(committed.opponent, "City")
        self.assertEqual(committed.lineup[0].location, BENCH)

    def test_add_game_rejects_unknown_location(self) -> None:
        with self.assertRaises(ValueError):
            self.fixtures.add_game("City", "2025-02-01", "10:00", "neutral")
        self.assertEqual(self.store.state.games, [])

    def test_delete_game(self) -> None:
        game = self.fixtures.add_game("City", "2025-02-01", "10:00", "home")
        self.fixtures.delete_game(game.id)
        self.assertIsNone(self.fixtures.get_game(game.id))

        before = self.store.state
        self.fixtures.delete_game("missing")
        self.assertIs(self.store.state, before)


if __name__ == "__main__":
    unittest.main()
