"""
Intent Prompts - Templates for extracting structured intents from instructions.

These prompts convert natural language commands like:
  "turn on the light in the living room"

Into flat intents like:
  {"target": "light", "action": "on", "content": "", "location": "living room"}

The dispatcher matches every field exactly, so the examples below use the
exact words of its vocabulary.
"""

# ---------------------------------------------------------------------------
# INTENT SYSTEM PROMPT
# ---------------------------------------------------------------------------
INTENT_SYSTEM_PROMPT = "You are my Home AI assistant."

# ---------------------------------------------------------------------------
# INTENT EXTRACTION PROMPT
# ---------------------------------------------------------------------------
# Format with: instruction
INTENT_EXTRACTION_PROMPT = """When I give you a command, respond with a JSON object that contains the following keys:
- "target": the target of the action (e.g., "light", "door", etc.).
- "action": the action to perform (e.g., "on", "off", "open", "close", "play", etc.).
- "content": the content to search (leave an empty string "" if not specified).
- "location": the location of the target (e.g., "living room", "bedroom", "toilet", "kitchen", "all", or leave it empty "" if not specified).

Instruction: {instruction}

Example:
- If the instruction is "turn on the light in the living room", the JSON object should be:
  {{"target": "light", "action": "on", "content": "", "location": "living room"}}
- If the instruction is "open the door", the JSON object should be:
  {{"target": "door", "action": "open", "content": "", "location": ""}}
- If the instruction is "turn on all the light", the JSON object should be:
  {{"target": "light", "action": "on", "content": "", "location": "all"}}

Please respond with only the JSON format. Always include all four keys. Do not include any additional explanation or text."""
