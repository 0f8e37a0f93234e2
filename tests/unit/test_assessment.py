"""
Unit tests for the narrative engineering assessment
"""

import unittest

from gcb_sizing.equipment.specs import GENERATOR_100MVA_13_8KV
from gcb_sizing.faults.solver import FaultResult, FaultSource
from gcb_sizing.utils.assessment import (
    ASSESSMENT_UNAVAILABLE,
    EngineeringAssessor,
    build_assessment_prompt,
)


SYSTEM_RESULT = FaultResult(FaultSource.SYSTEM, 44.83, 57.4, 120.14, 57.74, 90.05)
GENERATOR_RESULT = FaultResult(FaultSource.GENERATOR, 27.88, 53.35, 78.84, 34.92, 79.58)


class TestAssessmentPrompt(unittest.TestCase):
    """Test prompt construction from numeric results"""

    def test_contains_results(self):
        prompt = build_assessment_prompt(SYSTEM_RESULT, GENERATOR_RESULT, GENERATOR_100MVA_13_8KV)
        self.assertIn("44.83 kA", prompt)
        self.assertIn("27.88 kA", prompt)
        self.assertIn("79.58 ms", prompt)
        self.assertIn("100.0 MVA, 13.8 kV", prompt)
        self.assertIn("IEC/IEEE 62271-37-013", prompt)

    def test_zero_skipping_marked_critical(self):
        skipped = FaultResult(FaultSource.GENERATOR, 27.88, 110.0, 78.84, 50.0, 500.0, True)
        prompt = build_assessment_prompt(SYSTEM_RESULT, skipped, GENERATOR_100MVA_13_8KV)
        self.assertIn("Zero Skipping: YES (Critical)", prompt)

        prompt = build_assessment_prompt(SYSTEM_RESULT, GENERATOR_RESULT, GENERATOR_100MVA_13_8KV)
        self.assertIn("Zero Skipping: No", prompt)


class TestEngineeringAssessor(unittest.TestCase):
    """Test best-effort behaviour of the assessor"""

    def test_returns_generated_text(self):
        prompts = []

        def generator(prompt):
            prompts.append(prompt)
            return "System source governs the rating."

        assessor = EngineeringAssessor(generator)
        text = assessor.assess(SYSTEM_RESULT, GENERATOR_RESULT, GENERATOR_100MVA_13_8KV)

        self.assertEqual(text, "System source governs the rating.")
        self.assertEqual(len(prompts), 1)

    def test_failure_degrades_to_placeholder(self):
        def failing(prompt):
            raise ConnectionError("service unreachable")

        assessor = EngineeringAssessor(failing)
        with self.assertLogs("gcb_sizing.utils.assessment", level="ERROR"):
            text = assessor.assess(SYSTEM_RESULT, GENERATOR_RESULT, GENERATOR_100MVA_13_8KV)
        self.assertEqual(text, ASSESSMENT_UNAVAILABLE)

    def test_empty_response_degrades_to_placeholder(self):
        assessor = EngineeringAssessor(lambda prompt: "  ")
        text = assessor.assess(SYSTEM_RESULT, GENERATOR_RESULT, GENERATOR_100MVA_13_8KV)
        self.assertEqual(text, ASSESSMENT_UNAVAILABLE)

    def test_results_untouched_by_failure(self):
        before = (SYSTEM_RESULT, GENERATOR_RESULT)
        EngineeringAssessor(lambda prompt: 1 / 0).assess(
            SYSTEM_RESULT, GENERATOR_RESULT, GENERATOR_100MVA_13_8KV
        )
        self.assertEqual((SYSTEM_RESULT, GENERATOR_RESULT), before)


if __name__ == '__main__':
    unittest.main()
