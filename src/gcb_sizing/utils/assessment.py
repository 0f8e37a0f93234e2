"""
Narrative Engineering Assessment for GCB Sizing Results

Builds a review prompt from the numeric fault results and passes it to a
text-generation service. The assessment is optional enrichment: any
failure degrades to a placeholder text and never touches the numbers.
"""

import os
from typing import Callable, Optional
import logging

from gcb_sizing.equipment.specs import GeneratorSpec
from gcb_sizing.faults.solver import FaultResult

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

ASSESSMENT_UNAVAILABLE = (
    "Engineering assessment unavailable. Check that the text-generation "
    "service is configured (GOOGLE_API_KEY) and try again."
)

TextGenerator = Callable[[str], str]


def build_assessment_prompt(
    system_result: FaultResult,
    generator_result: FaultResult,
    generator: GeneratorSpec,
) -> str:
    """
    Build the review prompt from the study results

    Args:
        system_result: System-source fault result
        generator_result: Generator-source fault result
        generator: Generator nameplate

    Returns:
        Prompt text
    """
    zero_skipping = "YES (Critical)" if generator_result.current_zeros_skipped else "No"

    return f"""
Act as a Senior Power Systems Engineer. Review the following Generator Circuit Breaker (GCB) sizing calculation results based on IEC/IEEE 62271-37-013.

Data Provided:
Generator Rating: {generator.rated_power_mva} MVA, {generator.rated_voltage_kv} kV, X''d: {generator.subtransient_reactance_pct}%

Calculation Results:
1. System-Source Fault:
   - Symmetrical: {system_result.symmetrical_current_ka} kA
   - DC Component: {system_result.dc_component_pct}%
   - Asymmetrical: {system_result.asymmetrical_current_ka} kA
   - Time Constant: {system_result.time_constant_ms} ms

2. Generator-Source Fault:
   - Symmetrical: {generator_result.symmetrical_current_ka} kA
   - DC Component: {generator_result.dc_component_pct}%
   - Asymmetrical: {generator_result.asymmetrical_current_ka} kA
   - Time Constant: {generator_result.time_constant_ms} ms
   - Zero Skipping: {zero_skipping}

Task:
1. Provide a concise technical assessment of the GCB suitability.
2. Highlight which case (System or Generator source) dictates the rating.
3. Comment on the "Delayed Current Zero" phenomenon if applicable for the generator source.
4. Mention the TRV (Transient Recovery Voltage) class generally expected for system-source and generator-source duty.

Keep it professional, engineering-focused, and under 200 words. Format with Markdown.
""".strip()


class EngineeringAssessor:
    """Best-effort narrative assessment of GCB sizing results"""

    def __init__(self, text_generator: TextGenerator):
        """
        Initialize assessor

        Args:
            text_generator: Callable taking a prompt and returning text
        """
        self.text_generator = text_generator

    def assess(
        self,
        system_result: FaultResult,
        generator_result: FaultResult,
        generator: GeneratorSpec,
    ) -> str:
        """
        Request a narrative assessment

        Args:
            system_result: System-source fault result
            generator_result: Generator-source fault result
            generator: Generator nameplate

        Returns:
            Assessment text, or ASSESSMENT_UNAVAILABLE on any failure
        """
        prompt = build_assessment_prompt(system_result, generator_result, generator)
        try:
            text = self.text_generator(prompt)
        except Exception as e:
            logger.error(f"Engineering assessment request failed: {e}")
            return ASSESSMENT_UNAVAILABLE

        if not text or not text.strip():
            logger.warning("Engineering assessment service returned no text")
            return ASSESSMENT_UNAVAILABLE
        return text


def gemini_text_generator(
    api_key: Optional[str] = None,
    model: str = DEFAULT_GEMINI_MODEL,
) -> TextGenerator:
    """
    Text generator backed by the Gemini API

    Requires: pip install gcb-sizing[assessment]

    Args:
        api_key: API key (defaults to the GOOGLE_API_KEY environment variable)
        model: Gemini model name

    Returns:
        Callable taking a prompt and returning the response text
    """
    try:
        from google import genai
    except ImportError:
        logger.error("google-genai not installed. Run: pip install google-genai")
        raise

    key = api_key or os.getenv("GOOGLE_API_KEY")
    if not key:
        raise ValueError("GOOGLE_API_KEY is not set")

    client = genai.Client(api_key=key)

    def generate(prompt: str) -> str:
        response = client.models.generate_content(model=model, contents=prompt)
        return response.text

    return generate
