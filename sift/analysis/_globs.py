import re
from functools import lru_cache


@lru_cache(maxsize=2048)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """
    Translate a glob pattern to a compiled regex, supporting:
      - **  => match zero or more path segments
      - *   => [^/]*
      - ?   => [^/]
    The match is anchored (full string match).
    """
    i = 0
    n = len(pattern)
    out: list[str] = ["^"]
    while i < n:
        c = pattern[i]
        if c == "*":
            if i + 1 < n and pattern[i + 1] == "*":
                if i + 2 < n and pattern[i + 2] == "/":
                    # "**/" matches "anything/" or nothing
                    out.append("(?:(?:.*/)|)")
                    i += 3
                else:
                    out.append(".*")
                    i += 2
            else:
                out.append("[^/]*")
                i += 1
        elif c == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(c))
            i += 1
    out.append("$")
    return re.compile("".join(out))


def glob_match(rel_posix_path: str, pattern: str) -> bool:
    return glob_to_regex(pattern.replace("\\", "/")).match(rel_posix_path) is not None


def matches_any(rel_posix_path: str, patterns: tuple[str, ...]) -> bool:
    return any(glob_match(rel_posix_path, g) for g in patterns)
