import random

rate_limit_warnings = [
    "Whoa there, speedster! Take a break and try again in a bit.",
    "You've reached the top of the speedometer. Slow down and refresh later!",
    "Easy, tiger! You're clicking faster than we can handle.",
    "Even the flakiest test gets a retry budget. You've used yours, try again shortly.",
    "Your requests are running in parallel faster than our test runner. Pause for a moment.",
    "HTTP 429: Too Many Requests. Our assertions need a breather.",
    "Buffer overflow: your clicks are ahead of our clock cycles.",
    "Oops, you've hit the request ceiling. Grab a snack and come back!",
    "Breathe in, breathe out. And... refresh after a moment.",
    "You've won the 'Most Enthusiastic Clicker' award! Your prize: a short timeout.",
]

def get_random_rate_limit_warning(warnings = rate_limit_warnings):
    return random.choice(warnings)

def parse_env_var_to_list(env_var: str, separator: str = "|") -> list[str]:
    """Parse a pipe-separated string from an environment variable into a list of strings."""
    if not env_var:
        return []
    return [item.strip() for item in env_var.split(separator) if item.strip()]

def parse_bool(value) -> bool:
    """Parse truthy environment strings ("1", "true", "yes", "on")."""
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"not a boolean: {value!r}")

def full_name(first_name, last_name) -> str:
    return f"{first_name or ''} {last_name or ''}".strip()
