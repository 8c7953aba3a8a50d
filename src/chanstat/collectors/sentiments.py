"""Monthly sentiment scores from a word-emotion lexicon.

The lexicon is the NRC Word-Emotion Association Lexicon format: one
`word<TAB>category<TAB>0|1` association per line. Only associations marked 1
are kept; "positive"/"negative" fold into a single `sentiment` score of +1/-1,
every other category (joy, fear, ...) scores 1.

See http://saifmohammad.com/WebPages/NRC-Emotion-Lexicon.htm
"""

import logging
import re
from datetime import datetime
from pathlib import Path

from ..errors import ConfigError, LexiconError
from ..timeutil import month_key
from . import Collector, WriteFn

logger = logging.getLogger(__name__)

LEXICON_LINE_PATTERN = re.compile(r"^(?P<word>[a-z]+)\t(?P<type>[a-z]+)\t1$")
NON_WORD_PATTERN = re.compile(r"[^a-z0-9 ]")

Score = dict[str, float]


class SentimentCollector(Collector):
    """Collects lexicon scores of every word said, bucketed by month."""

    def __init__(self, lexicon: Path | str | None = None):
        if lexicon is None:
            raise ConfigError("Invalid config: 'lexicon' is required")
        self.months: dict[str, list[Score]] = {}
        self.lexicon: dict[str, Score] = {}
        self.load_lexicon(Path(lexicon))

    def load_lexicon(self, path: Path) -> None:
        """Read lexicon associations from `path` into `self.lexicon`.

        Raises:
            LexiconError: No valid association was found
            OSError: The file could not be read
        """
        skipped = 0
        with open(path, encoding="utf-8") as f:
            for line in f:
                match = LEXICON_LINE_PATTERN.match(line.strip())
                if not match:
                    skipped += 1
                    continue
                entry = self.lexicon.setdefault(match["word"], {})
                category = match["type"]
                if category == "positive":
                    entry["sentiment"] = 1
                elif category == "negative":
                    entry["sentiment"] = -1
                else:
                    entry[category] = 1

        if not self.lexicon:
            raise LexiconError(
                "Invalid lexicon: no valid lines found, is it the right format? "
                "Try downloading the NRC Emotion Lexicon! "
                "http://saifmohammad.com/WebPages/NRC-Emotion-Lexicon.htm"
            )
        logger.debug(f"Loaded {len(self.lexicon)} lexicon words from {path} ({skipped} lines skipped)")

    def get_word(self, word: str) -> Score | None:
        """Score for a word, falling back to its singular form."""
        result = self.lexicon.get(word)
        if result is None and word.endswith("s"):
            result = self.lexicon.get(word[:-1])
        return result

    def get_words(self, message: str) -> list[Score]:
        """Scores of every known word in a message."""
        normalized = NON_WORD_PATTERN.sub("", message.lower())
        scores = []
        for word in normalized.split(" "):
            if not word:
                continue
            score = self.get_word(word)
            if score is not None:
                scores.append(score)
        return scores

    @staticmethod
    def combine_score(words: list[Score]) -> Score | None:
        """Average each category over all words; None if there are none."""
        if not words:
            return None
        totals: Score = {}
        for word in words:
            for key, value in word.items():
                totals[key] = totals.get(key, 0) + value
        return {key: value / len(words) for key, value in totals.items()}

    def increment(self, time: datetime, message: str) -> None:
        words = self.get_words(message)
        if not words:
            return
        self.months.setdefault(month_key(time), []).extend(words)

    def on_action(self, time, nick, action):
        self.increment(time, action)

    def on_message(self, time, nick, message):
        self.increment(time, message)

    def on_notice(self, time, nick, message):
        # Notices are rare enough in channels to count as plain messages
        self.increment(time, message)

    def save(self, write: WriteFn) -> None:
        months = {month: self.combine_score(words) for month, words in self.months.items()}
        write("sentiments/months", months)
