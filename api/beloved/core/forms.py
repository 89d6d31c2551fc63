"""
Generic form handling

``FormState`` keeps the values of a form, the per-field validation errors,
which fields have been touched and where the submission is in its
lifecycle. Validation rules are plain callables ``rule(value, values)``
returning an error message or ``None``.
"""
import re
from typing import Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional, Set

from email_validator import EmailNotValidError, validate_email

Rule = Callable[[Any, Mapping[str, Any]], Optional[str]]

PHONE_PATTERN = re.compile(r"^\+?[\d\s-]{10,}$")

DEFAULT_SUBMIT_ERROR = "An error occurred"


class FormValidationError(Exception):
    """Raised when submitted form values fail their validation rules"""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Validation failed")
        self.errors = errors


class FormState:
    """Values, errors, touched fields and submission state of one form"""

    def __init__(
        self,
        initial_values: Mapping[str, Any],
        validation_rules: Optional[Mapping[str, Rule]] = None,
        on_submit: Optional[Callable[[Dict[str, Any]], Awaitable[Any]]] = None,
    ):
        self.initial_values = dict(initial_values)
        self.validation_rules = dict(validation_rules or {})
        self.on_submit = on_submit

        self.values: Dict[str, Any] = dict(initial_values)
        self.errors: Dict[str, str] = {}
        self.touched: Set[str] = set()
        self.is_submitting = False
        self.submit_error: Optional[str] = None

    def handle_change(self, field: str, value: Any) -> None:
        self.values[field] = value
        # Editing a field clears its error until it is validated again
        self.errors.pop(field, None)

    def handle_blur(self, field: str) -> Optional[str]:
        """Mark a field touched and validate just that field"""
        self.touched.add(field)
        error = self._run_rule(field)
        if error:
            self.errors[field] = error
        else:
            self.errors.pop(field, None)
        return error

    def validate_form(self) -> bool:
        errors = {}
        for field in self.validation_rules:
            error = self._run_rule(field)
            if error:
                errors[field] = error
        self.errors = errors
        return not errors

    async def handle_submit(self) -> bool:
        """Validate and, if valid, run ``on_submit``. Returns True on success."""
        self.submit_error = None
        self.touched.update(self.validation_rules)

        if not self.validate_form():
            return False

        self.is_submitting = True
        try:
            if self.on_submit is not None:
                await self.on_submit(dict(self.values))
        except Exception as exc:
            self.submit_error = str(exc) or DEFAULT_SUBMIT_ERROR
            return False
        finally:
            self.is_submitting = False
        return True

    def reset_form(self) -> None:
        self.values = dict(self.initial_values)
        self.errors = {}
        self.touched = set()
        self.submit_error = None

    def set_values(self, values: Mapping[str, Any]) -> None:
        self.values = dict(values)

    def _run_rule(self, field: str) -> Optional[str]:
        rule = self.validation_rules.get(field)
        if rule is None:
            return None
        return rule(self.values.get(field), self.values)


def validate_values(values: Mapping[str, Any], rules: Mapping[str, Rule]) -> Dict[str, Any]:
    """Validate submitted values against ``rules``, raising FormValidationError"""
    form = FormState(values, rules)
    if not form.validate_form():
        raise FormValidationError(form.errors)
    return form.values


# Rule helpers

def required(message: str) -> Rule:
    def rule(value, values):
        if value is None or value == "" or value == [] or value == {}:
            return message
        if isinstance(value, str) and not value.strip():
            return message
        return None
    return rule


def min_length(length: int, message: str) -> Rule:
    def rule(value, values):
        if value and len(value) < length:
            return message
        return None
    return rule


def email_format(message: str) -> Rule:
    """Same address rules as the login schema's EmailStr"""
    def rule(value, values):
        if not value:
            return None
        try:
            validate_email(str(value).strip(), check_deliverability=False)
        except EmailNotValidError:
            return message
        return None
    return rule


def phone_format(message: str) -> Rule:
    def rule(value, values):
        if value and not PHONE_PATTERN.match(value):
            return message
        return None
    return rule


def one_of(choices: Iterable[Any], message: str) -> Rule:
    allowed = {getattr(c, "value", c) for c in choices}

    def rule(value, values):
        if value is not None and value != "" and getattr(value, "value", value) not in allowed:
            return message
        return None
    return rule


def chain(*rules: Rule) -> Rule:
    """First failing rule wins"""
    def rule(value, values):
        for r in rules:
            error = r(value, values)
            if error:
                return error
        return None
    return rule
