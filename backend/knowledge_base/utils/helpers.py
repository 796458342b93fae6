import re

_SLUG_SEPARATOR = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """제목/이름을 URL slug로 변환합니다. 예: "Hello, World!  2.0" -> "hello-world-2-0"."""
    return _SLUG_SEPARATOR.sub("-", (value or "").lower()).strip("-")


LIKE_ESCAPE = "\\"


def like_pattern(keyword: str) -> str:
    """keyword를 부분 일치 LIKE 패턴으로 만듭니다. %, _ 는 문자 그대로 검색됩니다."""
    escaped = (
        keyword.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
