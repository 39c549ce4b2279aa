"""Short correlation tokens for accepted actions.

Tokens are sampled uniformly from 36 symbols (digits and lowercase
letters), six characters long. They are meant for a client to correlate a
fire-and-forget action in its own logs; they are not unique, not stored,
and not suitable as security tokens.
"""

from __future__ import annotations

import random
import re
from typing import Optional

from .. import constants

_ACTION_ID_PATTERN = re.compile(
    rf"^[0-9a-z]{{{constants.ACTION_ID_LENGTH}}}$"
)


def generate_action_id(rng: Optional[random.Random] = None) -> str:
    source = rng or random
    return "".join(
        source.choices(constants.ACTION_ID_ALPHABET, k=constants.ACTION_ID_LENGTH)
    )


def is_action_id(value: object) -> bool:
    return isinstance(value, str) and bool(_ACTION_ID_PATTERN.match(value))
