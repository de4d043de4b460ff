from markovgen.core.errors import ConfigurationError

SHORT_SEED_POLICIES = ("reject", "match")


def check_state_size(state_size: int) -> int:
    if isinstance(state_size, bool) or not isinstance(state_size, int) or state_size < 1:
        raise ConfigurationError(f"state_size must be a positive integer, got {state_size!r}")
    return state_size


def check_output_size(output_size: int) -> int:
    if isinstance(output_size, bool) or not isinstance(output_size, int) or output_size < 0:
        raise ConfigurationError(f"output_size must be a non-negative integer, got {output_size!r}")
    return output_size


def check_short_seed(policy: str) -> str:
    if policy not in SHORT_SEED_POLICIES:
        raise ConfigurationError(f"short_seed must be one of {SHORT_SEED_POLICIES}, got {policy!r}")
    return policy
