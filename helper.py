from collections import defaultdict
from itertools import zip_longest
import logging
from pathlib import Path

from constants import PROMPT
from hmm_model import CorpusError

logger = logging.getLogger(Path(__file__).stem)


# Case-folds a line (or an already split sequence) into tokens
def tokenize(line):
    if isinstance(line, str):
        line = line.split()
    return [token.lower() for token in line]


# Yields (sentence_line, tag_line) pairs from two line-aligned files
def read_line_pairs(sentences_path, tags_path):
    with open(sentences_path, "r", encoding="utf8") as sentences_file, \
            open(tags_path, "r", encoding="utf8") as tags_file:
        for index, (sentence, tags) in enumerate(zip_longest(sentences_file, tags_file)):
            if sentence is None or tags is None:
                raise CorpusError("%s and %s are not line-aligned (line %d is missing from %s)"
                                  % (sentences_path, tags_path, index,
                                     sentences_path if sentence is None else tags_path))
            yield sentence.strip(), tags.strip()


# Same as read_line_pairs, but each side already tokenized
def read_corpus(sentences_path, tags_path):
    for sentence, tags in read_line_pairs(sentences_path, tags_path):
        yield tokenize(sentence), tokenize(tags)


# Yields lines typed by the user until end of input
def stdin_lines(prompt=PROMPT):
    while True:
        print(prompt)
        try:
            yield input()
        except EOFError:
            return


# Returns word -> tag -> occurrences, for the baseline classifier
def count_word_tags(pairs):
    word2pos = defaultdict(lambda: defaultdict(lambda: 0))
    for sentence, tags in pairs:
        for word, postag in zip(tokenize(sentence), tokenize(tags)):
            word2pos[word][postag] += 1
    logger.debug("counted tags for %d distinct words", len(word2pos))
    return word2pos


# Keep the most frequent tag for each word - Used by base classifier
def keep_most_frequent_tags(word2pos):
    result_dict = {}
    for word in word2pos:
        max_occurrences = 0
        best_tag = ""
        # sorted, so equal counts go to the smallest tag
        for tag, occurrences in sorted(word2pos[word].items()):
            if occurrences > max_occurrences:
                max_occurrences = occurrences
                best_tag = tag
        result_dict[word] = best_tag

    return result_dict


# Get most probable of all tags
def find_most_probable_tag(word2pos):
    tag_occurrences = defaultdict(lambda: 0)
    for tags in word2pos.values():
        for tag, occurrences in tags.items():
            tag_occurrences[tag] += occurrences
    most_occurrences = 0
    most_probable_tag = ""
    for tag, occurrences in sorted(tag_occurrences.items()):
        if occurrences > most_occurrences:
            most_occurrences = occurrences
            most_probable_tag = tag
    return most_probable_tag
