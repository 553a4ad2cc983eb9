"""Prompt templates for the decision advisor"""
import json
from typing import Any, Dict, List, Optional

PERSONA_GUIDANCE = {
    "analytical": "Focus on data, metrics, and logical analysis",
    "empathetic": "Focus on emotions, relationships, and personal impact",
}


def _as_json(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


def simulation_prompt(
    decision_title: str,
    branch_name: str,
    branch_description: str,
    persona_style: str,
    decision_description: Optional[str],
    question_count: int,
) -> str:
    persona = PERSONA_GUIDANCE.get(persona_style, PERSONA_GUIDANCE["analytical"])
    return f"""You are Future-You one year from now. You experienced choosing "{branch_name}" for the decision "{decision_title}".

Decision Context: {decision_description or 'No additional context provided'}
Branch Description: {branch_description or 'No description provided'}

Use the decision context to make the reflection personal and realistic.
Speak in the first person and be reflective. Produce {question_count} probing questions that would have helped you make this choice, an optimistic scenario (short paragraph), a challenging scenario (short paragraph), and a short summary of the major tradeoffs.

Persona Style: {persona}

Output JSON matching this exact schema:
{{
  "questions": ["question1", "question2", "question3", "question4", "question5"],
  "optimisticScenario": "In one year, after choosing this path...",
  "challengingScenario": "In one year, after choosing this path, the challenges...",
  "summary": "Major tradeoffs: ...",
  "confidenceDeltaRecommendation": 0.5
}}"""


def comparison_prompt(decision_title: str, branches: List[Dict[str, Any]]) -> str:
    sections = []
    for position, branch in enumerate(branches[:2], start=1):
        sections.append(
            f"Branch {position}: {branch.get('name', '')}\n"
            f"Description: {branch.get('description', '')}\n"
            f"Simulation: {_as_json(branch.get('simulation'))}"
        )
    joined = "\n\n".join(sections)
    return f"""Compare these two life decision branches for "{decision_title}":

{joined}

Name both branches explicitly in the tradeoffs.

Generate a comparison analysis in JSON format:
{{
  "tradeoffs": ["tradeoff1", "tradeoff2", "tradeoff3"],
  "mergeConflicts": ["conflict1", "conflict2"],
  "recommendedMerge": "Based on the analysis, I recommend...",
  "confidenceImpact": "This decision will likely..."
}}"""


def branches_prompt(title: str, description: Optional[str]) -> str:
    return f"""You are an AI decision-making assistant. Given a decision title and description, generate exactly 2 meaningful, specific choices that represent the main paths forward for this decision.

Decision Title: "{title}"
Decision Description: "{description or ''}"

Extract the actual options mentioned in the decision and build the choices from them. For example:
- "Should I go to UW or Purdue?" -> "Go to UW" and "Go to Purdue"
- "Should I invest $1000 or $5000?" -> "Invest $1000" and "Invest $5000"

Each choice should be clear, actionable and genuinely different from the other.

Output JSON matching this exact schema:
{{
  "branches": [
    {{"name": "Specific Choice 1", "description": "What this choice involves and its implications"}},
    {{"name": "Specific Choice 2", "description": "What this choice involves and its implications"}}
  ]
}}"""


def followup_decisions_prompt(
    original_decision: str,
    chosen_path: str,
    simulation_result: Any,
) -> str:
    return f"""You are a life simulation AI. Based on the user's original decision, their chosen path, and the simulation results, write a storyline of their life journey and generate follow-up decisions.

Original Decision: "{original_decision}"
Chosen Path: "{chosen_path}"
Simulation Results: {_as_json(simulation_result)}

Write a specific, realistic storyline (2-3 paragraphs) showing how their life unfolds over 6-12 months after this choice, with both positive and challenging moments.

Then generate 3-4 specific follow-up decisions that naturally arise from the storyline. Prefer concrete decisions ("Negotiate a 20% raise at the 6-month review") over generic categories ("Continue Current Path").

Output JSON matching this exact schema:
{{
  "storyline": "Your detailed, specific storyline here...",
  "followUpDecisions": [
    {{"name": "Specific decision 1", "description": "What this involves"}},
    {{"name": "Specific decision 2", "description": "What this involves"}},
    {{"name": "Specific decision 3", "description": "What this involves"}}
  ]
}}"""


_PLAN_SCHEMA = """{
  "actionPlan": "Your detailed action plan here...",
  "potentialOutcomes": "Your potential outcomes here...",
  "nextSteps": "1) First step 2) Second step 3) Third step 4) Fourth step 5) Fifth step",
  "timeline": "Your timeline with specific milestones...",
  "resources": "Your specific resources and tools..."
}"""


def followup_simulation_prompt(
    original_decision: str,
    follow_up_name: str,
    follow_up_description: Optional[str],
) -> str:
    return f"""You are a life coaching AI. The user made the decision "{original_decision}" and is now considering the follow-up "{follow_up_name}".

Follow-up Description: "{follow_up_description or ''}"

Simulate what pursuing this follow-up would look like: an action plan, realistic outcomes, five immediate next steps, a timeline with milestones, and the resources they will need.

Output JSON matching this exact schema:
{_PLAN_SCHEMA}"""


def specific_followup_prompt(
    original_decision: str,
    chosen_path: str,
    broad_category: str,
    simulation_result: Any,
) -> str:
    return f"""You are a life coaching AI. Based on the user's original decision, their chosen path, the broad category they selected, and the simulation results, generate 3-4 specific, actionable follow-up decisions within that category.

Original Decision: "{original_decision}"
Chosen Path: "{chosen_path}"
Broad Category: "{broad_category}"
Simulation Results: {_as_json(simulation_result)}

Output JSON matching this exact schema:
{{
  "specificDecisions": [
    {{"name": "Specific decision 1", "description": "What this involves"}},
    {{"name": "Specific decision 2", "description": "What this involves"}},
    {{"name": "Specific decision 3", "description": "What this involves"}}
  ]
}}"""


def path_forward_prompt(
    original_decision: str,
    chosen_path: str,
    path_description: str,
) -> str:
    return f"""You are a life coaching AI. Based on the user's original decision and their chosen follow-up path, create a detailed, actionable "Your Path Forward" plan.

Original Decision: "{original_decision}"
Chosen Follow-up Path: "{chosen_path}"
Path Description: "{path_description}"

Include an action plan, realistic outcomes, five numbered next steps they can start immediately, a timeline with milestones, and specific resources. Make it specific to this decision and path.

Output JSON matching this exact schema:
{_PLAN_SCHEMA}"""


def clarification_check_prompt(title: str, description: Optional[str]) -> str:
    return f"""You are a helpful AI assistant that decides whether a decision has enough context for a realistic one-year simulation.

Title: "{title}"
Description: "{description or ''}"

Clarification is needed when the options, the personal situation, or the factors that matter are unclear.

Output JSON matching this exact schema:
{{
  "needsClarification": true,
  "reason": "Brief explanation"
}}"""


def clarifying_questions_prompt(title: str, description: Optional[str]) -> str:
    return f"""You are a helpful AI assistant that generates clarifying questions to enable realistic decision simulation.

Title: "{title}"
Description: "{description or ''}"

Generate 3-5 specific, conversational clarifying questions that uncover details about each option, the user's personal context, and the factors that would shape life one year after each choice. Do not lead toward any particular outcome.

Output JSON matching this exact schema:
{{
  "questions": ["question1", "question2", "question3", "question4", "question5"]
}}"""


def decision_summary_prompt(
    title: str,
    original_description: Optional[str],
    user_responses: List[Dict[str, str]],
) -> str:
    responses_text = "\n\n".join(
        f"Q{index}: {response.get('question', '')}\nA{index}: {response.get('answer', '')}"
        for index, response in enumerate(user_responses, start=1)
    )
    return f"""You are a helpful AI assistant that creates clear, comprehensive decision summaries.

Original Decision:
Title: "{title}"
Description: "{original_description or ''}"

User's Clarifying Responses:
{responses_text}

Create:
1. A conversational summary that starts with "Here's what I understand about your situation..." and synthesizes the key points.
2. An enhanced description that incorporates all of the context in the user's own voice.

Output JSON matching this exact schema:
{{
  "summary": "Here's what I understand about your situation...",
  "enhancedDescription": "Enhanced description incorporating all context..."
}}"""
