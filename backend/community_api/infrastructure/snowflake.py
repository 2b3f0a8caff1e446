"""ID Generator: time-ordered snowflake identifiers as decimal strings.

Invariants:
    - One generator per process, created lazily from settings.snowflake_worker_id
    - Ids from that generator are strictly increasing
    - The library yields None when it cannot issue an id for the current
      millisecond; generate_id retries until it can
"""

from snowflake import SnowflakeGenerator

from community_api.config import get_settings

_generator: SnowflakeGenerator | None = None


def generate_id() -> str:
    global _generator
    if _generator is None:
        _generator = SnowflakeGenerator(get_settings().snowflake_worker_id)
    value = next(_generator)
    while value is None:  # sequence exhausted or clock behind for this millisecond
        value = next(_generator)
    return str(value)
