"""Desktop simulator host: pygame window and session rules."""
