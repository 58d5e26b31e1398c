import pytest

from hmm_model import HMMModel
from hmm_train import train


# Ice cream / weather example: hot and cold days, 1-3 ice creams eaten
@pytest.fixture
def weather_model():
    transitions = {
        "#": {"cold": 5 / 10, "hot": 5 / 10},
        "hot": {"hot": 7 / 10, "cold": 3 / 10},
        "cold": {"cold": 7 / 10, "hot": 3 / 10},
    }
    emissions = {
        "hot": {"1": 2 / 10, "2": 3 / 10, "3": 5 / 10},
        "cold": {"1": 7 / 10, "2": 2 / 10, "3": 1 / 10},
    }
    return HMMModel.from_probabilities(emissions, transitions)


# Small grammar: nouns, proper nouns, verbs and conjunctions
@pytest.fixture
def grammar_model():
    transitions = {
        "#": {"n": 5 / 7, "np": 2 / 7},
        "cnj": {"n": 1 / 3, "np": 1 / 3, "v": 1 / 3},
        "n": {"cnj": 2 / 8, "v": 6 / 8},
        "np": {"v": 2 / 2},
        "v": {"cnj": 1 / 9, "n": 6 / 9, "np": 2 / 9},
    }
    emissions = {
        "cnj": {"and": 3 / 3},
        "n": {"cat": 5 / 12, "dog": 5 / 12, "watch": 2 / 12},
        "np": {"chase": 5 / 5},
        "v": {"chase": 2 / 9, "get": 1 / 9, "watch": 6 / 9},
    }
    return HMMModel.from_probabilities(emissions, transitions)


@pytest.fixture
def corpus():
    return [
        ("The dog runs", "DET N V"),
        ("a dog", "DET N"),
        ("the cat sleeps", "DET N V"),
        ("dogs run", "N V"),
    ]


@pytest.fixture
def corpus_model(corpus):
    return train(corpus)
