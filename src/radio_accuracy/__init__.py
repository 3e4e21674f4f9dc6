"""Radio Accuracy - speech accuracy scoring for police radio training.

Scores a recognized speech transcript against an expected radio phrase:
1. 10-codes: "10-4", "ten four", "10 four" and friends
2. NATO phonetic alphabet: one letter-name per token
3. General radio protocol phrases: word-by-word fuzzy comparison
"""

__version__ = "0.1.0"
