"""Unit tests for classifier verdict models."""

import pytest
from clawpurge.models.verdict import Classification, Confidence, Evidence, Verdict


class TestVerdict:
    """Tests for Verdict exit codes."""

    @pytest.mark.parametrize(
        ("verdict", "code"),
        [
            (Verdict.GENUINE, 0),
            (Verdict.UNUSUAL, 0),
            (Verdict.FALSE_POSITIVE, 1),
            (Verdict.NO_DETECTION, 1),
        ],
    )
    def test_exit_code(self, verdict: Verdict, code: int) -> None:
        """Genuine and unusual exit 0, everything else 1."""
        assert verdict.exit_code == code


class TestEvidence:
    """Tests for Evidence."""

    def test_other_found(self) -> None:
        """Other evidence excludes npm and pnpm hits."""
        evidence = Evidence(total_found=5, npm_found=1, pnpm_found=2)

        assert evidence.package_manager_found == 3
        assert evidence.other_found == 2
        assert evidence.to_dict()["other_found"] == 2


class TestClassification:
    """Tests for Classification."""

    def test_to_dict(self) -> None:
        """Serialization includes verdict, confidence, exit code and evidence."""
        classification = Classification(
            verdict=Verdict.FALSE_POSITIVE,
            evidence=Evidence(total_found=1, npm_found=1),
            rationale=("Only npm packages detected (1)",),
            confidence=Confidence.LIKELY,
        )

        data = classification.to_dict()

        assert data["verdict"] == "false_positive"
        assert data["confidence"] == "likely"
        assert data["exit_code"] == 1
        assert data["rationale"] == ["Only npm packages detected (1)"]
        assert data["evidence"]["npm_found"] == 1

    def test_headlines(self) -> None:
        """Each verdict has its own headline."""
        evidence = Evidence()

        assert Classification(Verdict.GENUINE, evidence).headline == "GENUINE DETECTION"
        assert Classification(Verdict.NO_DETECTION, evidence).headline == "NO DETECTION"
        assert Classification(Verdict.UNUSUAL, evidence).headline == "UNUSUAL CASE"
        confirmed = Classification(
            Verdict.FALSE_POSITIVE, evidence, confidence=Confidence.CONFIRMED
        )
        assert confirmed.headline == "FALSE POSITIVE CONFIRMED"
