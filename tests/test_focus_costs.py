# tests/test_focus_costs.py
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from focus import costs
from focus.models import FocusState, CostContext
from focus.definitions import actions as action_defs

def make_state(current=100.0, is_overloaded=False):
    return FocusState(
        current=current, maximum=100.0, drain_rate=1.0, regen_rate=0.5,
        overload_threshold=20.0, is_overloaded=is_overloaded, last_action=0.0,
    )

EXPLOIT_CONTEXT = {"time_spent": 40000, "difficulty": 5, "pressure": 3, "consecutive_actions": 8}

class TestFocusCosts(unittest.TestCase):
    """Test suite for the pure cost calculation."""

    def test_base_costs_from_table(self):
        state = make_state()
        self.assertEqual(costs.calculate_focus_cost(state, "help"), 1)
        self.assertEqual(costs.calculate_focus_cost(state, "scan"), 5)
        self.assertEqual(costs.calculate_focus_cost(state, "backdoor"), 20)

    def test_unknown_command_uses_default_profile(self):
        state = make_state()
        self.assertEqual(costs.calculate_focus_cost(state, "rm"), action_defs.DEFAULT_BASE_COST)
        action = action_defs.get_action("rm")
        self.assertEqual((action.base_cost, action.complexity, action.stress_level), (5, 3, 3))

    def test_action_table_is_complete(self):
        self.assertEqual(len(action_defs.ACTIONS), 22)
        self.assertEqual(action_defs.ACTIONS["exploit"].base_cost, 15)
        self.assertEqual(action_defs.ACTIONS["social_engineer"].stress_level, 8)

    def test_multiplier_ordering(self):
        """15 x 1.5 x 2.0 x 1.3 x 1.3, rounded up."""
        state = make_state()
        self.assertEqual(costs.calculate_focus_cost(state, "exploit", EXPLOIT_CONTEXT), 77)

    def test_context_accepts_dataclass_and_camel_case(self):
        state = make_state()
        dataclass_ctx = CostContext(time_spent=40000, difficulty=5, pressure=3, consecutive_actions=8)
        camel_ctx = {"timeSpent": 40000, "difficulty": 5, "pressure": 3, "consecutiveActions": 8}
        self.assertEqual(costs.calculate_focus_cost(state, "exploit", dataclass_ctx), 77)
        self.assertEqual(costs.calculate_focus_cost(state, "exploit", camel_ctx), 77)

    def test_context_thresholds_are_strict(self):
        state = make_state()
        self.assertEqual(costs.calculate_focus_cost(state, "scan", {"time_spent": 30000}), 5)
        self.assertEqual(costs.calculate_focus_cost(state, "scan", {"consecutive_actions": 5}), 5)
        # 5 x 1.1 = 5.5
        self.assertEqual(costs.calculate_focus_cost(state, "scan", {"consecutive_actions": 6}), 6)
        # 5 x 1.5 = 7.5
        self.assertEqual(costs.calculate_focus_cost(state, "scan", {"time_spent": 30001}), 8)

    def test_overload_doubles_cost(self):
        self.assertEqual(costs.calculate_focus_cost(make_state(is_overloaded=True), "scan"), 10)
        self.assertEqual(costs.calculate_focus_cost(make_state(is_overloaded=True), "exploit", EXPLOIT_CONTEXT), 153)

    def test_efficiency_bands_are_exclusive(self):
        """Below 30% only the 1.8 band applies, never 1.8 x 1.4."""
        self.assertEqual(costs.calculate_focus_cost(make_state(current=29), "scan"), 9)
        self.assertEqual(costs.calculate_focus_cost(make_state(current=45), "scan"), 7)
        self.assertEqual(costs.calculate_focus_cost(make_state(current=50), "scan"), 5)
        self.assertEqual(costs.calculate_focus_cost(make_state(current=30), "scan"), 7)

    def test_overload_and_efficiency_compound(self):
        state = make_state(current=20, is_overloaded=True)
        # 76.05 x 2 x 1.8
        self.assertEqual(costs.calculate_focus_cost(state, "exploit", EXPLOIT_CONTEXT), 274)

    def test_cost_is_deterministic_for_fixed_state(self):
        state = make_state(current=63)
        first = costs.calculate_focus_cost(state, "help", {})
        second = costs.calculate_focus_cost(state, "help", {})
        self.assertEqual(first, second)

    def test_unsupported_context_type(self):
        with self.assertRaises(TypeError):
            costs.calculate_focus_cost(make_state(), "scan", ["not", "a", "context"])

if __name__ == '__main__':
    unittest.main()
