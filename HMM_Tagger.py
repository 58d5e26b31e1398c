import argparse
import logging
from pathlib import Path
import sys

from constants import OOV_PENALTY, PROMPT
from evaluation import (evaluate_tagger, learning_curves, plot_learning_curves,
                        print_HMM_classification_report, print_report)
from helper import read_line_pairs, stdin_lines
from hmm_model import DecodeFailure, HMMError
from hmm_train import train
from viterbi import tag_line

logger = logging.getLogger(Path(__file__).stem)


# Print tags for every line coming from the line source
def interactive_tagger(model, lines, oov_penalty=OOV_PENALTY, out=print):
    for line in lines:
        try:
            out(tag_line(model, line, oov_penalty))
        except DecodeFailure as e:
            out("Could not tag line: %s" % e)


def parse_args(argv):
    parser = argparse.ArgumentParser("HMM part-of-speech tagger")
    parser.add_argument("train_sentences", help="Training sentences, one line per sentence")
    parser.add_argument("train_tags", help="Training tags, line-aligned with the sentences")
    parser.add_argument("--test-sentences", help="Test sentences to evaluate on")
    parser.add_argument("--test-tags", help="Gold tags for the test sentences")
    parser.add_argument("--report", action="store_true",
                        help="Also print a per-tag classification report")
    parser.add_argument("--plot", help="Save learning curves over the test set to this image")
    parser.add_argument("--interactive", action="store_true",
                        help="Tag sentences typed on standard input")
    parser.add_argument("--oov-penalty", type=float, default=OOV_PENALTY,
                        help="Log score of a word never seen with a tag")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(list(argv))
    if (args.test_sentences is None) != (args.test_tags is None):
        parser.error("--test-sentences and --test-tags go together")
    if args.plot and args.test_sentences is None:
        parser.error("--plot needs a test set")
    return args


def main(argv=None):
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        model = train(read_line_pairs(args.train_sentences, args.train_tags))

        if args.test_sentences:
            test_pairs = list(read_line_pairs(args.test_sentences, args.test_tags))
            report = evaluate_tagger(model, test_pairs, args.oov_penalty, progress=True)
            print_report(report, args.test_sentences)
            if args.report:
                print_HMM_classification_report(report)
            if args.plot:
                train_pairs = read_line_pairs(args.train_sentences, args.train_tags)
                results = learning_curves(train_pairs, test_pairs, oov_penalty=args.oov_penalty)
                plot_learning_curves(results, args.plot)
                logger.info("saved learning curves to %s", args.plot)

        if args.interactive:
            interactive_tagger(model, stdin_lines(PROMPT), args.oov_penalty)
    except (HMMError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
