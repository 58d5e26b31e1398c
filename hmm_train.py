from collections import defaultdict
import logging
from pathlib import Path

from nltk.util import ngrams

from constants import START_TAG
from helper import tokenize
from hmm_model import HMMModel, ReservedTagError, TrainingError, counts_to_log_probabilities

logger = logging.getLogger(Path(__file__).stem)


# Count tag -> word frequencies and tag -> next tag frequencies.
# Every tag that ends a line becomes a transition key even with no successor.
def count_tables(corpus):
    pos2word = defaultdict(lambda: defaultdict(lambda: 0))
    pos2pos = defaultdict(lambda: defaultdict(lambda: 0))
    pos2pos.setdefault(START_TAG, defaultdict(lambda: 0))

    n_lines = 0
    for line_index, (sentence, tags) in enumerate(corpus):
        words = tokenize(sentence)
        postags = tokenize(tags)
        if len(words) != len(postags):
            raise TrainingError(line_index, len(words), len(postags))
        if START_TAG in postags:
            raise ReservedTagError(line_index, START_TAG)
        if not words:
            continue
        n_lines += 1

        for word, postag in zip(words, postags):
            pos2word[postag][word] += 1
        for prev_tag, postag in ngrams([START_TAG] + postags, 2):
            pos2pos[prev_tag][postag] += 1
        pos2pos.setdefault(postags[-1], defaultdict(lambda: 0))

    logger.debug("counted %d lines", n_lines)
    return pos2word, pos2pos


def train(corpus):
    """Estimates an HMM from (tokens, tags) line pairs.

    Each side of a pair may be a whitespace separated string or a sequence;
    both are case-folded. Raises TrainingError on the first line whose token
    and tag counts differ, or ReservedTagError on a line tagged with the
    start pseudo-tag, before any model is built.
    """
    pos2word, pos2pos = count_tables(corpus)
    model = HMMModel.from_log_tables(counts_to_log_probabilities(pos2word),
                                     counts_to_log_probabilities(pos2pos))
    logger.info("trained HMM: %d tags, %d words", len(model.tags), len(model.vocabulary))
    return model
