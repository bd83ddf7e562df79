import pytest
from speakeval.phrase_bank import PhraseBank
from speakeval.models import MatchMethod, QuestionSet
from speakeval.data.phrases import EVALUATION_PHRASES, FALLBACK_RESPONSE, LEARNING_PHRASES


class TestPhraseBank:
    """Test cases for PhraseBank lookups."""

    @pytest.fixture
    def bank(self):
        """Create PhraseBank instance for testing."""
        return PhraseBank()

    def test_question_sets(self, bank):
        assert len(bank.questions(QuestionSet.LEARNING)) == 5
        assert len(bank.questions(QuestionSet.EVALUATION)) == 10
        assert bank.questions("evaluation")[0] == "How are you today?"

    def test_learning_set_checked_first(self, bank):
        answers = bank.get_expected_responses("How are you today?")
        assert answers == LEARNING_PHRASES["How are you today?"]
        assert answers[0] == "I am fine, thank you. How about you?"

    def test_containment_is_case_and_whitespace_insensitive(self, bank):
        answers = bank.get_expected_responses("   WHERE DO YOU LIVE?  ")
        assert answers == LEARNING_PHRASES["Where do you live?"]

    def test_input_contained_in_question(self, bank):
        # normalized input without the question mark
        match = bank.resolve("what is your name")
        assert match.question == "What is your name?"
        assert match.question_set == QuestionSet.EVALUATION
        assert match.method == MatchMethod.CONTAINMENT
        assert match.answers == list(EVALUATION_PHRASES["What is your name?"])

    def test_question_contained_in_input(self, bank):
        match = bank.resolve("So, what is your favorite food? Tell me.")
        assert match.question == "What is your favorite food?"
        assert match.method == MatchMethod.CONTAINMENT

    def test_short_input_matches_first_containing_question(self, bank):
        assert bank.resolve("you").question == "How are you today?"
        assert bank.resolve("live").question == "Where do you live?"

    def test_partial_word_overlap(self, bank):
        match = bank.resolve("Tell me where you live")
        assert match.method == MatchMethod.PARTIAL
        assert match.question == "Where do you live?"
        assert match.question_set == QuestionSet.LEARNING

    def test_partial_overlap_against_unseen_question(self, bank):
        # four of the five words of "What is your favorite hobby?" are present
        match = bank.resolve("What is your favorite color?")
        assert match.method == MatchMethod.PARTIAL
        assert match.question == "What is your favorite hobby?"

    def test_fallback(self, bank):
        match = bank.resolve("Quantum chromodynamics")
        assert match.is_fallback
        assert match.question is None
        assert bank.get_expected_responses("Quantum chromodynamics") == (FALLBACK_RESPONSE,)

    def test_empty_question_resolves_to_first_question(self, bank):
        answers = bank.get_expected_responses("")
        assert answers == LEARNING_PHRASES["How are you today?"]

    @pytest.mark.parametrize(
        "question",
        ["", " ", "?", "zzz", "How are you today?", "Can you describe your family?", "a" * 200],
    )
    def test_lookup_is_total(self, bank, question):
        assert len(bank.get_expected_responses(question)) >= 1

    def test_custom_phrases(self):
        bank = PhraseBank(
            learning={"Say hello": ["Hello!"]},
            evaluation={},
            fallback="No idea.",
        )
        assert bank.get_expected_responses("say hello") == ("Hello!",)
        assert bank.get_expected_responses("completely different") == ("No idea.",)

    def test_lookups_do_not_mutate_bank(self, bank):
        match = bank.resolve("Where do you live?")
        match.answers.append("tampered")
        assert "tampered" not in bank.get_expected_responses("Where do you live?")


if __name__ == "__main__":
    pytest.main([__file__])
