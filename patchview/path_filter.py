from typing import Iterable, Optional

from wcmatch import glob

# minimatch-style: `**` spans directories, `*` stays inside one, braces expand
GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB | glob.CASE


class PathFilter:
    """
    Include/exclude glob rules for changed file paths.

    A rule starting with `!` excludes. A path passes when it matches at least
    one include rule (or there are none) and matches no exclude rule.
    """

    def __init__(self, rules: Optional[Iterable[str]] = None):
        self.rules: list[tuple[str, bool]] = []
        for rule in rules or []:
            trimmed = (rule or "").strip()
            if not trimmed:
                continue
            if trimmed.startswith("!"):
                self.rules.append((trimmed[1:].strip(), True))
            else:
                self.rules.append((trimmed, False))

    def check(self, path: str) -> bool:
        if not self.rules:
            return True

        included = False
        excluded = False
        has_include_rules = False

        for pattern, exclude in self.rules:
            if glob.globmatch(path, pattern, flags=GLOB_FLAGS):
                if exclude:
                    excluded = True
                else:
                    included = True
            if not exclude:
                has_include_rules = True

        return (not has_include_rules or included) and not excluded

    def __repr__(self) -> str:
        rendered = ", ".join(f"!{p}" if exclude else p for p, exclude in self.rules)
        return f"PathFilter([{rendered}])"
