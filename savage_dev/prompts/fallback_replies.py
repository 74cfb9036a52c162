# Role: Fixed assistant replies used when the generation service gives us nothing usable.
# Kept in character; the real error never reaches the user.

# Service answered, but with no text.
EMPTY_REPLY = "The server ignored you. Probably because your request was mid."

# Service call failed (transport, API error, malformed payload).
ERROR_REPLY = "CRITICAL ERROR: My brain just segfaulted trying to process that junk."
