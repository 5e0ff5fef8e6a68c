import os
from typing import Optional

from fast_rules.core import lang
from fast_rules.utils.env_utils import configure_env
from fast_rules.utils.logging import setup_logging

_booted = False


def boot(*,
    env_file_name: Optional[str] = None,
    log_file_name: Optional[str] = None,
    log_dir: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Sets up the validator for an application.
    - Loads environment variables (`.env.<ENV>` / `.env` or the given file)
    - Sets up logging
    - Applies VALIDATOR_LANG, VALIDATOR_LANG_FALLBACK and VALIDATOR_LANG_PATH

    Args:
        env_file_name: Optional environment file to load instead of the defaults.
        log_file_name: Optional log file name (defaults to LOG_FILE_NAME or fast_rules.log).
        log_dir: Optional directory for the log file.
        force: Boot again even if already booted.
    """
    global _booted
    if _booted and not force:
        return

    configure_env(env_file_name)
    setup_logging(log_file_name, log_dir)

    lang.set_lang_path(os.getenv("VALIDATOR_LANG_PATH") or None)
    lang.set_fallback_lang(os.getenv("VALIDATOR_LANG_FALLBACK", "en"))
    lang.use_lang(os.getenv("VALIDATOR_LANG", "en"))

    _booted = True


def is_booted() -> bool:
    return _booted
