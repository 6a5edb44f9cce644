import unittest

from crossfill.core.exceptions import SearchExhausted, SlotUnsatisfiable
from crossfill.data.dictionary import WordIndex
from crossfill.engine.config import FillConfig
from crossfill.engine.grid import CrosswordGrid
from crossfill.engine.placement import PlacementBoard
from crossfill.engine.search import SearchAttempt, SearchState
from crossfill.engine.slots import SlotGraph
from crossfill.engine.validator import FillValidator


class FirstChoiceSource:
    """Uniform source pinned to 0.0, so every weighted draw takes index 0."""

    def next_uniform(self) -> float:
        return 0.0


def _build(rows, entries):
    grid = CrosswordGrid.from_rows(rows)
    graph = SlotGraph.build(grid, WordIndex(entries))
    return grid, graph


class PlacementBoardTests(unittest.TestCase):
    def test_place_rejects_conflicts_and_duplicates(self) -> None:
        grid, graph = _build(["...", ".##", ".##"], ["CAT;10", "DOG;10", "CAR;5"])
        board = PlacementBoard(grid, graph)
        across, down = graph.get(0), graph.get(1)
        cat, dog, car = across.options

        self.assertTrue(board.try_place(across, cat))
        self.assertFalse(board.try_place(down, cat))
        self.assertFalse(board.try_place(down, dog))
        self.assertTrue(board.try_place(down, car))
        self.assertEqual(grid.to_rows(), ["CAT", "A##", "R##"])
        self.assertEqual(board.placed_words, {"CAT", "CAR"})
        self.assertEqual(len(board.choices), len(graph.fixed_slots()))

    def test_undo_keeps_letters_of_complete_crossing_words(self) -> None:
        grid, graph = _build(["...", ".##", ".##"], ["CAT;10", "CAR;5"])
        board = PlacementBoard(grid, graph)
        across, down = graph.get(0), graph.get(1)
        board.try_place(across, across.options[0])
        board.try_place(down, down.options[1])

        undone = board.undo_last()
        self.assertEqual(undone.word, "CAR")
        self.assertEqual(grid.to_rows(), ["CAT", ".##", ".##"])
        self.assertFalse(down.is_fixed)

        board.undo_last()
        self.assertEqual(grid.to_rows(), ["...", ".##", ".##"])
        self.assertEqual(board.placed_words, set())

    def test_undo_keeps_given_letters(self) -> None:
        grid, graph = _build(["C..", ".##", ".##"], ["CAT;10"])
        board = PlacementBoard(grid, graph)
        across = graph.get(0)
        board.try_place(across, across.options[0])
        board.undo_last()
        self.assertEqual(grid.to_rows(), ["C..", ".##", ".##"])


class SearchAttemptTests(unittest.TestCase):
    def test_search_fills_every_slot(self) -> None:
        grid, graph = _build(["...", ".##", ".##"], ["CAT;10", "COT;10", "CUT;10"])
        attempt = SearchAttempt(grid, graph, seed=0, max_backtracks=10)
        choices = attempt.run()

        self.assertEqual(attempt.state, SearchState.DONE)
        self.assertEqual(len(choices), 2)
        self.assertEqual(len({choice.word for choice in choices}), 2)
        for choice in choices:
            slot = graph.get(choice.slot_id)
            self.assertEqual("".join(grid.letter(r, c) for r, c in slot.cells), choice.word)
        self.assertEqual(attempt.statistics.states, 3)

    def test_same_seed_is_deterministic(self) -> None:
        entries = ["CAT;60", "TOE;40", "COD;30", "EAT;20", "TEA;10", "DOT;10", "ATE;5", "ACE;5"]

        def run_once(seed):
            grid, graph = _build(["...", ".#.", "..."], entries)
            attempt = SearchAttempt(grid, graph, seed=seed, max_backtracks=50)
            while not attempt.finished:
                attempt.step()
            stats = attempt.statistics.as_dict()
            return attempt.state, [(c.slot_id, c.word) for c in attempt.choices], stats, grid.to_rows()

        self.assertEqual(run_once(3), run_once(3))

    def test_slot_failure_below_streak_threshold_fails_attempt(self) -> None:
        grid, graph = _build(["...", ".##", ".##"], ["DOG;100", "CAT;10", "CAR;5"])
        attempt = SearchAttempt(grid, graph, seed=0, max_backtracks=10, rng=FirstChoiceSource())
        with self.assertRaises(SlotUnsatisfiable):
            attempt.run()
        self.assertEqual(attempt.state, SearchState.FAILED)
        self.assertEqual(attempt.failure_streak, 1)
        self.assertEqual(attempt.statistics.backtracks, 0)

    def test_backtrack_undoes_and_eliminates_last_choice(self) -> None:
        grid, graph = _build(["...", ".##", ".##"], ["DOG;100", "CAT;10", "CAR;5"])
        config = FillConfig(failure_streak_threshold=1)
        attempt = SearchAttempt(grid, graph, seed=0, max_backtracks=10, config=config, rng=FirstChoiceSource())

        while attempt.state != SearchState.BACKTRACK:
            attempt.step()
        self.assertEqual(grid.to_rows(), ["DOG", ".##", ".##"])

        self.assertEqual(attempt.step(), SearchState.SELECT)
        across = graph.get(0)
        self.assertEqual(attempt.choices, [])
        self.assertEqual(attempt.board.placed_words, set())
        self.assertEqual(across.eliminations, {"DOG"})
        self.assertEqual(across.remaining_option_count, 2)
        self.assertEqual(attempt.failure_streak, 0)
        self.assertEqual(attempt.last_slot_id, 0)
        self.assertEqual(grid.to_rows(), ["...", ".##", ".##"])

        # the down slot ran out of words before the backtrack
        with self.assertRaises(SlotUnsatisfiable):
            attempt.run()
        self.assertEqual(attempt.statistics.backtracks, 2)

    def test_partial_backtrack_keeps_earlier_choices_and_finishes(self) -> None:
        # BAT is the only ?AT word; the down word must read B?D after DOG,
        # and no such word exists, so DOG is undone and HOG tried instead
        entries = [
            "DOG;90", "HOG;80", "BAT;70",
            "ARM;60", "EEL;59", "FIG;58", "ICE;57", "JAM;56", "KIT;55", "LIP;54", "MUD;53",
            "BAH;1",
        ]
        grid, graph = _build([".AT", ".##", ".OG"], entries)
        top, bottom, down = graph.get(0), graph.get(1), graph.get(2)
        self.assertEqual(len(down.options), 12)

        attempt = SearchAttempt(
            grid, graph, seed=0, max_backtracks=10, failure_streak=3, rng=FirstChoiceSource(),
        )
        while attempt.state != SearchState.BACKTRACK:
            attempt.step()
        self.assertEqual(grid.to_rows(), ["BAT", ".##", "DOG"])
        self.assertEqual(len(down.eliminations), 10)

        self.assertEqual(attempt.step(), SearchState.SELECT)
        self.assertEqual([(c.slot_id, c.word) for c in attempt.choices], [(0, "BAT")])
        self.assertEqual(len(attempt.choices), len(graph.fixed_slots()))
        self.assertEqual(attempt.board.placed_words, {c.word for c in attempt.choices})
        self.assertTrue(top.is_fixed)
        self.assertFalse(bottom.is_fixed)
        self.assertEqual(bottom.eliminations, {"DOG"})
        self.assertEqual(grid.to_rows(), ["BAT", ".##", ".OG"])
        self.assertEqual(attempt.failure_streak, 0)

        choices = attempt.run()
        self.assertEqual(attempt.state, SearchState.DONE)
        self.assertEqual([(c.slot_id, c.word) for c in choices], [(0, "BAT"), (1, "HOG"), (2, "BAH")])
        self.assertEqual(grid.to_rows(), ["BAT", "A##", "HOG"])
        self.assertEqual(attempt.board.placed_words, {"BAT", "HOG", "BAH"})
        self.assertEqual(attempt.statistics.backtracks, 2)
        self.assertEqual(attempt.statistics.restricted_branchings, 1)
        self.assertTrue(FillValidator().validate(grid, graph, choices).ok)

    def test_empty_choice_stack_exhausts_search(self) -> None:
        grid, graph = _build([".....", "#####", "....."], ["APPLE;90"])
        config = FillConfig(failure_streak_threshold=1)
        attempt = SearchAttempt(grid, graph, seed=0, max_backtracks=10, config=config)
        with self.assertRaises(SearchExhausted):
            attempt.run()
        self.assertEqual(attempt.choices, [])
        self.assertEqual(attempt.board.placed_words, set())
        self.assertEqual(grid.to_rows(), [".....", "#####", "....."])

    def test_conflict_weight_increment_bumps_failed_crossings(self) -> None:
        grid, graph = _build(["...", ".##", ".##"], ["DOG;100", "CAT;10", "CAR;5"])
        config = FillConfig(conflict_weight_increment=0.5)
        attempt = SearchAttempt(grid, graph, seed=0, max_backtracks=10, config=config, rng=FirstChoiceSource())
        with self.assertRaises(SlotUnsatisfiable):
            attempt.run()
        crossing_id = graph.get(1).crossings[0].crossing_id
        self.assertEqual(attempt.weights.weight(crossing_id), 1.5)


if __name__ == "__main__":
    unittest.main()
