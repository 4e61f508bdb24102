"""The ranking-policy enumeration."""

from enum import IntEnum
from typing import Any

import numpy as np

from .exceptions import InvalidPolicyError


class RankingPolicy(IntEnum):
    """
    Tie-handling convention used to turn values into rank numbers.

    The integer codes match the 1-5 selection offered by the command line
    tool. For ``V = [1, 2, 2, 4]``:

    ====  ========================  ===================  =================
    code  policy                    ties get ... rank    ranks
    ====  ========================  ===================  =================
    1     ``DENSE``                 same                 ``1 2 2 3``
    2     ``ORDINAL``               consecutive          ``1 2 3 4``
    3     ``COMPETITION``           same minimum         ``1 2 2 4``
    4     ``MODIFIED_COMPETITION``  same maximum         ``1 3 3 4``
    5     ``FRACTIONAL``            same average         ``1 2.5 2.5 4``
    ====  ========================  ===================  =================
    """

    DENSE = 1
    ORDINAL = 2
    COMPETITION = 3
    MODIFIED_COMPETITION = 4
    FRACTIONAL = 5

    @classmethod
    def coerce(cls, policy: Any) -> "RankingPolicy":
        """
        Resolve a member, an integer code 1-5, or a policy name.

        Names are case-insensitive and also accept the aliases used by
        :func:`scipy.stats.rankdata` (``"min"``, ``"max"``, ``"average"``,
        ``"ordinal"``, ``"dense"``).

        Raises:
            InvalidPolicyError: If ``policy`` names no known convention.
        """
        if isinstance(policy, cls):
            return policy

        if isinstance(policy, (bool, np.bool_)):
            raise InvalidPolicyError(f"Unknown ranking policy: {policy!r}")

        if isinstance(policy, (int, np.integer)):
            try:
                return cls(int(policy))
            except ValueError:
                raise InvalidPolicyError(
                    f"Ranking policy code must be between 1 and 5, got {policy!r}"
                ) from None

        if isinstance(policy, str):
            key = policy.strip().lower().replace("-", "_").replace(" ", "_")
            if key.isdigit():
                return cls.coerce(int(key))
            if key in _POLICY_ALIASES:
                return _POLICY_ALIASES[key]

        raise InvalidPolicyError(
            f"Unknown ranking policy: {policy!r}. "
            f"Must be one of {[p.name.lower() for p in cls]} or a code 1-5."
        )


_POLICY_ALIASES = {
    "dense": RankingPolicy.DENSE,
    "ordinal": RankingPolicy.ORDINAL,
    "first": RankingPolicy.ORDINAL,
    "competition": RankingPolicy.COMPETITION,
    "standard_competition": RankingPolicy.COMPETITION,
    "min": RankingPolicy.COMPETITION,
    "modified_competition": RankingPolicy.MODIFIED_COMPETITION,
    "competition_max": RankingPolicy.MODIFIED_COMPETITION,
    "max": RankingPolicy.MODIFIED_COMPETITION,
    "fractional": RankingPolicy.FRACTIONAL,
    "average": RankingPolicy.FRACTIONAL,
    "avg": RankingPolicy.FRACTIONAL,
}
