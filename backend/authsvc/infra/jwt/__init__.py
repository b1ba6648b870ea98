from .jwt_token_codec import ACCEPTED_ALGORITHMS, SIGNING_ALGORITHM, JWTTokenCodec

__all__ = ["JWTTokenCodec", "SIGNING_ALGORITHM", "ACCEPTED_ALGORITHMS"]
