#!/usr/bin/env python3
"""
Basic cscorrect Usage Example

This example demonstrates the core workflow:
1. Build resources (counts, confusion set, language model)
2. Locate likely errors in a sentence
3. Correct a sentence and inspect ranked candidates
4. Tune the search through configuration
5. Correct a batch of sentences
"""

from cscorrect import (
    ConfusionSet,
    CorrectionConfig,
    Corrector,
    CountDictionary,
    NGramLanguageModel,
    Sentence,
)


def main():
    # ─────────────────────────────────────────────────────────────────────────
    # 1. Resources
    # ─────────────────────────────────────────────────────────────────────────

    # Unigram and bigram counts; CountDictionary.load() reads the same
    # data from a token<TAB>count file
    counts = CountDictionary(
        {"我": 10, "买": 5, "卖": 1, "苹": 2, "果": 3, "我买": 4, "买苹": 1, "苹果": 2}
    )
    confusions = ConfusionSet.from_mapping({"买": "卖", "卖": "买"})
    language_model = NGramLanguageModel(counts, order=3)

    corrector = Corrector(
        dictionary=counts,
        confusion_set=confusions,
        language_model=language_model,
        config=CorrectionConfig(score_combination="log_sum"),
    )

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Error Location
    # ─────────────────────────────────────────────────────────────────────────

    sentence = Sentence.from_text("我卖苹果")
    print(f"Suspect positions: {corrector.locate_errors(sentence)}")

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Correction
    # ─────────────────────────────────────────────────────────────────────────

    result = corrector.correct("我卖苹果")
    print(f"{result.original_text} -> {result.corrected_text}")
    print(f"  Changed positions: {result.changed_positions}")
    for candidate in result.candidates:
        print(f"  {candidate.sentence}  {candidate.score:.3f}")

    # Positions can also be given explicitly
    result = corrector.correct("我卖苹果", locations=[1])
    print(f"  Searched {result.search_stats.rounds} position(s)")

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Configuration
    # ─────────────────────────────────────────────────────────────────────────

    config = CorrectionConfig(
        beam_width=20,  # Hypotheses expanded per position
        max_results=3,  # Candidates kept in the result
        channel_model="unigram",  # Candidate frequency only, no context
        score_combination="log_sum",
    )
    tuned = Corrector(counts, confusions, language_model, config=config)
    print(f"Pipeline: {tuned.get_info()}")

    # ─────────────────────────────────────────────────────────────────────────
    # 5. Batch Correction
    # ─────────────────────────────────────────────────────────────────────────

    for result in corrector.correct_batch(["我卖苹果", "我买苹果"], parallel=True):
        print(f"{result.original_text} -> {result.corrected_text}")


if __name__ == "__main__":
    main()
