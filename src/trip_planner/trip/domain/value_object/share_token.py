import re
import secrets
import string
from dataclasses import dataclass

SHARE_TOKEN_ALPHABET = string.ascii_letters + string.digits + "_-"
SHARE_TOKEN_LENGTH = 16

_SHARE_TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_-]{16}")


@dataclass(frozen=True)
class ShareToken:
    """公開旅行の共有トークン（16文字, [A-Za-z0-9_-]）

    認証なしで旅行を閲覧するための不透明な識別子。
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _SHARE_TOKEN_PATTERN.fullmatch(self.value):
            raise ValueError(f"Invalid share token: {self.value!r}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> "ShareToken":
        """暗号論的に安全な乱数でトークンを生成する（64種 × 16文字 = 96bit）"""
        return cls(
            value="".join(
                secrets.choice(SHARE_TOKEN_ALPHABET) for _ in range(SHARE_TOKEN_LENGTH)
            )
        )
