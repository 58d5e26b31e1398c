### Start pseudo-tag, precedes the first token of every line ###
START_TAG = "#"

### Log score for a word never seen under a tag ###
OOV_PENALTY = -100.0

### Rows of the model must sum to one within this ###
NORMALIZATION_TOLERANCE = 1e-9

### Learning curves ###
LEARNING_CURVE_STEPS = 10
RANDOM_SEED = 0

### Interactive loop ###
PROMPT = "Type a sentence to tag"
