import logging
import math
from pathlib import Path

from constants import OOV_PENALTY, START_TAG
from helper import tokenize
from hmm_model import DecodeFailure

logger = logging.getLogger(Path(__file__).stem)


def viterbi(model, line, oov_penalty=OOV_PENALTY):
    """Returns the most probable (upper-cased) tag sequence for a line.

    Only tags reachable through recorded transitions are ever scored. Exact
    score ties go to the lexicographically smallest tag, for predecessors and
    for the final state alike. Raises DecodeFailure when no live state has a
    transition into the next token.
    """
    words = tokenize(line)
    if not words:
        return []

    # Frontier of live states -> cumulative log score
    current_scores = {START_TAG: 0.0}
    # One {tag: predecessor} map per token
    backpointer = []

    for position, word in enumerate(words):
        next_scores = {}
        best_prev = {}
        # sorted, so on equal scores the first (smallest) predecessor is kept
        for curr in sorted(current_scores):
            curr_score = current_scores[curr]
            for next_tag, transition in model.successors(curr).items():
                score = curr_score + transition + model.emission_log_prob(next_tag, word, oov_penalty)
                if next_tag not in next_scores or score > next_scores[next_tag]:
                    next_scores[next_tag] = score
                    best_prev[next_tag] = curr

        if not next_scores:
            logger.debug("dead end at token %d of %r", position, line)
            raise DecodeFailure(position, word)
        current_scores = next_scores
        backpointer.append(best_prev)

    tracer = min(current_scores, key=lambda tag: (-current_scores[tag], tag))

    # Backtrack
    solution = []
    for best_prev in reversed(backpointer):
        solution.append(tracer)
        tracer = best_prev[tracer]
    return [tag.upper() for tag in reversed(solution)]


def tag_line(model, line, oov_penalty=OOV_PENALTY):
    return " ".join(viterbi(model, line, oov_penalty))


# Log score of one given tag path, using the same rules as viterbi().
# A transition that was never recorded makes the path impossible.
def sequence_log_probability(model, words, tags, oov_penalty=OOV_PENALTY):
    words = tokenize(words)
    tags = tokenize(tags)
    if len(words) != len(tags):
        raise ValueError("%d words but %d tags" % (len(words), len(tags)))

    log_probability = 0.0
    prev_tag = START_TAG
    for word, tag in zip(words, tags):
        transition = model.successors(prev_tag).get(tag)
        if transition is None:
            return -math.inf
        log_probability += transition + model.emission_log_prob(tag, word, oov_penalty)
        prev_tag = tag
    return log_probability
