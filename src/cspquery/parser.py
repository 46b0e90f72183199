"""Support table parser for CSP documentation pages.

CSP pages carry an edition support table (edition, Windows 10, Windows 11)
and a list of self-referencing bookmark anchors naming the page's policies.
The table is recovered by filtering the whitespace-split page for tokens that
carry table markup, stripping that markup and known header words, and
regrouping what is left three tokens at a time.

Policy names are paired with rows positionally: the name only advances after
a row whose edition is ``Education``, which is the last edition of each
block in the published tables. Pages with a different edition order pair
names incorrectly; that layout dependence is kept as-is.
"""

from __future__ import annotations

import structlog

from cspquery.models.support import NO_POLICIES, SupportRow

log = structlog.get_logger()

BOOKMARK_MARKER = 'data-linktype="self-bookmark"'

# Stripped from each bookmark match, in this order
_BOOKMARK_NOISE = (
    BOOKMARK_MARKER + ">",
    BOOKMARK_MARKER,
    "</a>",
    "</dt>",
    "</dd>",
)

TABLE_MARKUP = (
    "<th>",
    "</th>",
    "<tr>",
    "</tr>",
    "<td>",
    "</td>",
    "<tbody>",
    "</tbody>",
    "<table>",
    "</table>",
)

# Header words and separators removed from the joined table text
NOISE_WORDS = ("Edition", "Windows", "10", "11", ", ")

GROUP_SIZE = 3
ADVANCE_EDITION = "Education"

_EDITION_REWRITES = {"SE": "Windows SE"}
_WINDOWS10_REWRITES = {"Yes1607": "Yes, starting in Windows 10 build 1607"}


def tokenize(content: str) -> list[str]:
    """Split page content on whitespace, dropping empty tokens."""
    return content.split()


def recover_policy_names(tokens: list[str]) -> list[str]:
    """Return the policy names named by self-bookmark anchors, in page order.

    Each marker token is taken together with the token after it, so a name
    broken across whitespace is rejoined once markup is stripped.
    """
    names: list[str] = []
    for i, token in enumerate(tokens):
        if BOOKMARK_MARKER not in token:
            continue
        following = tokens[i + 1] if i + 1 < len(tokens) else ""
        name = token + following
        for noise in _BOOKMARK_NOISE:
            name = name.replace(noise, "")
        if name:
            names.append(name)
    return names


def extract_table_text(tokens: list[str]) -> str:
    """Join the text of every token that carries structural table markup."""
    cells: list[str] = []
    for token in tokens:
        if not any(markup in token for markup in TABLE_MARKUP):
            continue
        for markup in TABLE_MARKUP:
            token = token.replace(markup, "")
        token = token.strip()
        if token:
            cells.append(token)
    return " ".join(cells)


def remove_noise(table_text: str) -> list[str]:
    """Drop header words from the table text and return the flat token stream."""
    for word in NOISE_WORDS:
        table_text = table_text.replace(word, "")
    return [token for token in table_text.split() if token]


def _policy_for(names: list[str], counter: int) -> str:
    if not names:
        return NO_POLICIES
    if len(names) == 1:
        return names[0]
    if counter < len(names):
        return names[counter]
    log.warning("policy_pairing_overrun", counter=counter, recovered=len(names))
    return NO_POLICIES


def group_rows(tokens: list[str], names: list[str]) -> list[SupportRow]:
    """Regroup the flat token stream into support rows.

    A trailing group shorter than three tokens is dropped.
    """
    rows: list[SupportRow] = []
    policy_counter = 0
    for i in range(0, len(tokens) - GROUP_SIZE + 1, GROUP_SIZE):
        edition, windows10, windows11 = tokens[i : i + GROUP_SIZE]

        for old, new in _WINDOWS10_REWRITES.items():
            windows10 = windows10.replace(old, new)

        rows.append(
            SupportRow(
                policy=_policy_for(names, policy_counter),
                edition=_EDITION_REWRITES.get(edition, edition),
                windows10=windows10,
                windows11=windows11,
            )
        )

        if edition == ADVANCE_EDITION:
            policy_counter += 1

    return rows


def reshape(content: str) -> list[SupportRow]:
    """Parse a CSP page's raw HTML into its ordered support rows."""
    tokens = tokenize(content)
    names = recover_policy_names(tokens)
    stream = remove_noise(extract_table_text(tokens))
    rows = group_rows(stream, names)
    log.debug(
        "page_reshaped",
        policies=len(names),
        table_tokens=len(stream),
        rows=len(rows),
    )
    return rows
