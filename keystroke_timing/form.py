# ABOUTME: Login and extra-word form wiring: attach loggers on page init and fill the submission payload
import logging
from typing import Dict, Iterable, Optional, Tuple

from .logger import KeystrokeLogger
from .surface import TextInput
from .utils import ConfigManager


class LoginForm:
    """A form holding named text inputs and hidden fields sent on submit."""

    def __init__(self, form_id: str, inputs: Iterable[TextInput] = ()):
        self.form_id = form_id
        self.inputs: Dict[str, TextInput] = {field.name: field for field in inputs}
        self.hidden: Dict[str, str] = {}
        self.submitted = False

    def query(self, name: str) -> Optional[TextInput]:
        return self.inputs.get(name)

    def fields(self) -> Dict[str, str]:
        """Values posted on submit, visible inputs first."""
        data = {name: field.value for name, field in self.inputs.items()}
        data.update(self.hidden)
        return data


def attach_on_init(
    form: LoginForm, input_name: str, config: Optional[ConfigManager] = None
) -> Optional[KeystrokeLogger]:
    """Bind a fresh keystroke logger to a form input when the page loads."""
    field = form.query(input_name)
    if field is None:
        logging.warning(f"Input '{input_name}' not found in form '{form.form_id}', skipping keystroke logging")
        return None
    return KeystrokeLogger(field, config)


def populate_submission(
    form: LoginForm,
    logger: Optional[KeystrokeLogger],
    config: Optional[ConfigManager] = None,
) -> Dict[str, str]:
    """Write the timing summary into the hidden data field and submit the form.

    A missing logger never blocks submission; the form is sent without
    keystroke data.
    """
    config = config or ConfigManager()
    data_field = config.get("form.data_field", "keystrokeData")

    if logger is None:
        logging.warning(f"No keystroke logger for form '{form.form_id}', submitting without timing data")
    else:
        summary = logger.get_summary()
        form.hidden[data_field] = summary.to_json()
        logging.info(
            f"Attached {len(summary)} keystroke events ({summary.total_time} ms) to '{form.form_id}'"
        )

    form.submitted = True
    return form.fields()


def login_page(config: Optional[ConfigManager] = None) -> Tuple[LoginForm, Optional[KeystrokeLogger]]:
    """Build the username/password form with its password logger attached."""
    config = config or ConfigManager()
    password_field = config.get("form.password_field", "password")
    form = LoginForm("kc-form-login", [TextInput("username"), TextInput(password_field)])
    return form, attach_on_init(form, password_field, config)


def extra_word_page(
    config: Optional[ConfigManager] = None,
) -> Tuple[LoginForm, Optional[KeystrokeLogger]]:
    """Build the extra-word typing challenge form with its logger attached."""
    config = config or ConfigManager()
    word_field = config.get("form.extra_word_field", "extraWord")
    form = LoginForm("kc-form-extra-word", [TextInput(word_field)])
    return form, attach_on_init(form, word_field, config)
