"""Type hints used in Chess Tourney."""

from typing import Dict, Optional, Tuple

# (white_id, black_id)
ColourPair = Tuple[str, str]
# Round number -> player id receiving the bye
ByeLedger = Dict[int, str]
# Player sitting the round out, if any
MaybePlayerId = Optional[str]
