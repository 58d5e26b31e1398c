from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping

import numpy as np

from constants import NORMALIZATION_TOLERANCE, OOV_PENALTY, START_TAG

Table = Mapping[str, Mapping[str, float]]


class HMMError(Exception):
    pass


class CorpusError(HMMError, ValueError):
    pass


class TrainingError(CorpusError):
    """A corpus line whose token count and tag count differ."""

    def __init__(self, line_index, n_tokens, n_tags):
        self.line_index = line_index
        self.n_tokens = n_tokens
        self.n_tags = n_tags
        super().__init__(
            "line %d has %d tokens but %d tags" % (line_index, n_tokens, n_tags))


class ReservedTagError(CorpusError):
    """A corpus line using the start pseudo-tag as a real tag."""

    def __init__(self, line_index, tag):
        self.line_index = line_index
        self.tag = tag
        super().__init__(
            "line %d uses the reserved start tag %r" % (line_index, tag))


class DecodeFailure(HMMError):
    """No live state can reach the token at `position`."""

    def __init__(self, position, token):
        self.position = position
        self.token = token
        super().__init__(
            "no recorded transition reaches token %d (%r)" % (position, token))


# Converts a table of raw counts (outer -> inner -> count) to log-probabilities,
# normalizing every row by its own total. Empty rows stay empty.
def counts_to_log_probabilities(counts):
    log_probs = {}
    for outer, row in counts.items():
        total_count = float(sum(row.values()))
        log_probs[outer] = {inner: float(np.log(count / total_count))
                            for inner, count in row.items()}
    return log_probs


def _freeze(table):
    return MappingProxyType({outer: MappingProxyType(dict(row))
                             for outer, row in table.items()})


@dataclass(frozen=True)
class HMMModel:
    """First-order HMM in log-probability space.

    emissions:   tag -> {word -> log P(word | tag)}
    transitions: tag -> {next_tag -> log P(next_tag | tag)}, with the start
                 pseudo-tag as the source of first-tag probabilities.

    Both tables are read-only views, so a model can be shared by any number
    of decode calls.
    """
    emissions: Table
    transitions: Table

    @classmethod
    def from_log_tables(cls, emissions, transitions):
        return cls(_freeze(emissions), _freeze(transitions))

    @classmethod
    def from_probabilities(cls, emissions, transitions):
        """Builds a model from plain probabilities, e.g. a hand-written example."""
        def to_log(table):
            log_table = {}
            for outer, row in table.items():
                for inner, prob in row.items():
                    if prob <= 0:
                        raise ValueError(
                            "probability of %r under %r must be positive, got %r" % (inner, outer, prob))
                log_table[outer] = {inner: float(np.log(prob)) for inner, prob in row.items()}
            return log_table

        return cls.from_log_tables(to_log(emissions), to_log(transitions))

    @property
    def tags(self):
        tags = set(self.emissions)
        for source, row in self.transitions.items():
            tags.add(source)
            tags.update(row)
        tags.discard(START_TAG)
        return sorted(tags)

    @property
    def vocabulary(self):
        return {word for row in self.emissions.values() for word in row}

    def successors(self, tag) -> Mapping[str, float]:
        return self.transitions.get(tag, MappingProxyType({}))

    def emission_log_prob(self, tag, word, oov_penalty=OOV_PENALTY) -> float:
        row = self.emissions.get(tag)
        if row is None:
            return oov_penalty
        return row.get(word, oov_penalty)

    def to_dicts(self):
        def thaw(table) -> Dict[str, Dict[str, float]]:
            return {outer: dict(row) for outer, row in table.items()}
        return thaw(self.emissions), thaw(self.transitions)

    def is_normalized(self, tolerance=NORMALIZATION_TOLERANCE):
        for table in (self.emissions, self.transitions):
            for row in table.values():
                if row and abs(float(np.exp(list(row.values())).sum()) - 1.0) > tolerance:
                    return False
        return True

    # mappingproxy cannot be pickled, rebuild from plain dicts instead
    def __reduce__(self):
        return self.__class__.from_log_tables, self.to_dicts()
