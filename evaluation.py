from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt
from matplotlib.font_manager import FontProperties
from sklearn.metrics import accuracy_score, classification_report, confusion_matrix
from sklearn.utils import shuffle
from tqdm import tqdm

from constants import LEARNING_CURVE_STEPS, OOV_PENALTY, RANDOM_SEED
from helper import count_word_tags, find_most_probable_tag, keep_most_frequent_tags, tokenize
from hmm_model import DecodeFailure
from hmm_train import train
from viterbi import viterbi

logger = logging.getLogger(Path(__file__).stem)


@dataclass
class LineResult:
    index: int
    sentence: str
    predicted: List[str]
    gold: List[str]
    correct: int
    total: int
    failure: Optional[str] = None

    @property
    def length_mismatch(self):
        return self.failure is None and len(self.predicted) != len(self.gold)


@dataclass
class EvaluationReport:
    lines: List[LineResult] = field(default_factory=list)

    @property
    def correct(self):
        return sum(line.correct for line in self.lines)

    @property
    def total(self):
        return sum(line.total for line in self.lines)

    @property
    def accuracy(self):
        return self.correct / self.total if self.total else 0.0

    @property
    def mismatched_lines(self):
        return [line for line in self.lines if line.length_mismatch]

    @property
    def failed_lines(self):
        return [line for line in self.lines if line.failure is not None]


# Gold tags are compared case-insensitively, in the decoder's upper case
def _gold_tags(tags):
    return [tag.upper() for tag in tokenize(tags)]


def evaluate_tagger(model, pairs, oov_penalty=OOV_PENALTY, skip_failures=True, progress=False):
    """Tags every sentence of (sentence, gold tags) pairs and counts matches.

    Every gold tag counts towards the total, so predictions missing because
    of a length mismatch or a DecodeFailure count as wrong. A DecodeFailure
    is re-raised when skip_failures is false.
    """
    report = EvaluationReport()
    for index, (sentence, tags) in enumerate(tqdm(pairs, desc="Tagging", disable=not progress)):
        gold = _gold_tags(tags)
        failure = None
        try:
            predicted = viterbi(model, sentence, oov_penalty)
        except DecodeFailure as e:
            if not skip_failures:
                raise
            logger.warning("line %d: %s", index, e)
            predicted = []
            failure = str(e)

        if failure is None and len(predicted) != len(gold):
            logger.warning("line %d: %d predicted tags but %d gold tags",
                           index, len(predicted), len(gold))
        correct = sum(1 for pred, true in zip(predicted, gold) if pred == true)
        report.lines.append(LineResult(index, sentence if isinstance(sentence, str) else " ".join(sentence),
                                       predicted, gold, correct, len(gold), failure))
    return report


def print_report(report, name="test"):
    for line in report.lines:
        print("Line %d: %s" % (line.index, line.sentence))
        if line.failure is not None:
            print("Line %d decode failure: %s" % (line.index, line.failure))
        else:
            print("Line %d HMM tags: %s" % (line.index, " ".join(line.predicted)))
        print("Line %d true tags: %s" % (line.index, " ".join(line.gold)))
        if line.length_mismatch:
            print("Line %d length mismatch: %d predicted, %d true"
                  % (line.index, len(line.predicted), len(line.gold)))
        print("Line %d correct = %d/%d" % (line.index, line.correct, line.total))

    print("%s correct: %d/%d" % (name, report.correct, report.total))


# Flattened gold and predicted tags of the lines that lined up
def get_HMM_y(report):
    test_y = []
    pred = []
    for line in report.lines:
        if line.failure is None and not line.length_mismatch:
            test_y += line.gold
            pred += line.predicted
    return test_y, pred


def print_HMM_classification_report(report):
    test_y, pred = get_HMM_y(report)
    if not test_y:
        print("no aligned lines to report on")
        return
    labels = sorted(set(test_y) | set(pred))
    print(classification_report(test_y, pred, labels=labels, zero_division=0))
    print(confusion_matrix(test_y, pred, labels=labels))


# Predicts the most frequent training tag of each word, or the overall most
# frequent tag for unseen words
def baseline_tags(word2pos, most_probable_tag, sentence):
    return [word2pos.get(word, most_probable_tag).upper() for word in tokenize(sentence)]


def _token_accuracy(gold_lines, predicted_lines):
    test_y = []
    pred = []
    for gold, predicted in zip(gold_lines, predicted_lines):
        test_y += gold
        # pad so that missing predictions count as errors
        pred += (list(predicted) + [""] * len(gold))[:len(gold)]
    if not test_y:
        return 0.0
    return accuracy_score(test_y, pred)


def _hmm_accuracy(model, pairs, oov_penalty):
    return evaluate_tagger(model, pairs, oov_penalty).accuracy


def _baseline_accuracy(train_pairs, test_pairs):
    word2pos = count_word_tags(train_pairs)
    most_probable_tag = find_most_probable_tag(word2pos)
    word2pos = keep_most_frequent_tags(word2pos)
    return _token_accuracy([_gold_tags(tags) for _, tags in test_pairs],
                           [baseline_tags(word2pos, most_probable_tag, sentence) for sentence, _ in test_pairs])


def learning_curves(train_pairs, test_pairs, steps=LEARNING_CURVE_STEPS,
                    random_state=RANDOM_SEED, oov_penalty=OOV_PENALTY):
    """Token accuracy of models trained on growing shares of the training set.

    Returns a dict of parallel lists: train_size, on_train, on_test and
    base_classifier (most-frequent-tag baseline on the test set).
    """
    train_pairs = shuffle(list(train_pairs), random_state=random_state)
    test_pairs = list(test_pairs)

    results = {'train_size': [], 'on_train': [], 'on_test': [], 'base_classifier': []}
    for i in range(1, steps + 1):
        if i == steps:
            train_part = train_pairs
        else:
            to = max(1, int(i * (len(train_pairs) / steps)))
            train_part = train_pairs[0:to]
        logger.info("iteration : %d (%d lines)", i, len(train_part))

        model = train(train_part)
        results['train_size'].append(len(train_part))
        results['on_train'].append(_hmm_accuracy(model, train_part, oov_penalty))
        results['on_test'].append(_hmm_accuracy(model, test_pairs, oov_penalty))
        results['base_classifier'].append(_baseline_accuracy(train_part, test_pairs))

    return results


def plot_learning_curves(results, path, title="Learning Curves : Accuracy"):
    fontP = FontProperties()
    fontP.set_size('small')

    fig = plt.figure()
    fig.suptitle(title, fontsize=20)
    ax = fig.add_subplot(111)
    ax.axis([0, max(results['train_size']) + 1, 0, 1.1])
    line_up, = ax.plot(results['train_size'], results['on_train'], 'o-', label='Train', color="blue")
    line_down, = ax.plot(results['train_size'], results['on_test'], 'o-', label='Test', color="orange")
    line_base, = ax.plot(results['train_size'], results['base_classifier'], 'o-', label='Baseline',
                         color="green")

    ax.set_xlabel('N. of training lines', fontsize=18)
    ax.set_ylabel('Accuracy', fontsize=16)
    ax.legend([line_up, line_down, line_base], ['Train', 'Test', 'Baseline'], prop=fontP)
    ax.grid(True)

    fig.savefig(path)
    plt.close(fig)
    return path
