"""Lunch box ideas from whatever is in the fridge.

Centres around the `SuggestionOrchestrator`:

- `prompts.build_prompt` turns the inventory and dietary preferences into
  a prompt.
- `ai_client.AIClient` sends it to Gemini, OpenAI or Claude and decodes the
  ideas, insisting on at least three.
- `youtube.YouTubeClient` finds a video per idea when it can. It never
  fails the suggestions.

Inventory, preferences and favorites live in `stores`. Secrets come from a
`credentials.CredentialStore`.
"""
