import os

# Language used for messages when a validator is not given one
VALIDATOR_LANG = os.getenv("VALIDATOR_LANG", "en")

# Language whose templates fill gaps in the active language
VALIDATOR_LANG_FALLBACK = os.getenv("VALIDATOR_LANG_FALLBACK", "en")

# Optional directory of `<lang>.json` files merged over the bundled tables
VALIDATOR_LANG_PATH = os.getenv("VALIDATOR_LANG_PATH") or None
