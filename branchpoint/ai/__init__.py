"""Text generation, prompt building and response adaptation"""
from branchpoint.ai.advisor import DecisionAdvisor
from branchpoint.ai.client import OpenAITextGenerator, TextGenerator, UnavailableTextGenerator
from branchpoint.ai.json_extraction import extract_json_object

__all__ = [
    "DecisionAdvisor",
    "OpenAITextGenerator",
    "TextGenerator",
    "UnavailableTextGenerator",
    "extract_json_object",
]
