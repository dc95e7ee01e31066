from secretvote.consensus import reconstruct
from secretvote.expression import decode_share_value

__all__ = ["reconstruct", "decode_share_value"]
