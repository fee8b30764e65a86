from .share_token_issuer import ShareTokenIssuer

__all__ = ["ShareTokenIssuer"]
