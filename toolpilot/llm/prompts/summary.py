"""
Summary prompts.

After a plan runs, the model gets the executed results back and writes the
reply the user will read.
"""

SUMMARY_PROMPT = """The user requested: "{prompt}"

I executed {step_count} steps successfully with these results:

{results_json}

Based on our conversation history and the current results, please generate a comprehensive, friendly response that continues our conversation naturally. DO NOT ask for confirmation if we're in the middle of a task - just continue with the next logical steps."""

FALLBACK_SUMMARY = "Execution completed successfully."
