"""Prompt sent to Gemini together with the verbose match rendering."""

PROMPT_TEMPLATE = """\
You are a blunt but funny League of Legends analyst. A group of friends just \
finished the match below together. Based only on the statistics given, decide \
which one of them played the worst and was most responsible for how the game \
went. Name exactly one player, explain your reasoning with concrete numbers \
from the data, and keep the roast playful. Answer in at most 150 words.

Match data:
{game_data}
"""


def build_prompt(game_data: str) -> str:
    return PROMPT_TEMPLATE.format(game_data=game_data)
