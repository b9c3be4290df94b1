"""
core/ledger/serialization.py 테스트

로컬 캐시 JSON / 원격 문서 변환 및 형식 오류 처리 테스트
"""

import json
from datetime import date
from decimal import Decimal

import pytest

from core.errors import DeserializationError
from core.ledger.serialization import (
    dumps_ledger,
    from_remote_document,
    institutions_from_list,
    institutions_to_list,
    loads_ledger,
    to_remote_document,
)


class TestLedgerJson:
    """dumps_ledger / loads_ledger 테스트"""

    def test_round_trip(self, sample_ledger) -> None:
        assert loads_ledger(dumps_ledger(sample_ledger)) == sample_ledger

    def test_empty_ledger(self) -> None:
        assert dumps_ledger([]) == "[]"
        assert loads_ledger("[]") == []

    def test_amounts_written_as_strings(self, bank_b) -> None:
        data = json.loads(dumps_ledger([bank_b]))

        assert data[0]["investments"][0]["amount_after_investment"] == "700.25"

    def test_non_ascii_names(self) -> None:
        text = json.dumps([{"institution": "국민은행", "investments": []}], ensure_ascii=False)

        assert loads_ledger(text)[0].institution == "국민은행"

    def test_invalid_json(self) -> None:
        with pytest.raises(DeserializationError):
            loads_ledger("{not json")


class TestInstitutionsFromList:
    """institutions_from_list 검증 테스트"""

    def test_numeric_amounts_accepted(self) -> None:
        """JSON 숫자 금액도 허용"""
        result = institutions_from_list([
            {
                "institution": "Broker A",
                "investments": [
                    {
                        "date": "2024-01-01",
                        "amount_before_investment": 100,
                        "amount_after_investment": 150.5,
                    }
                ],
            }
        ])

        record = result[0].investments[0]
        assert record.date == date(2024, 1, 1)
        assert record.amount_after_investment == Decimal("150.5")

    def test_missing_investments_defaults_empty(self) -> None:
        assert institutions_from_list([{"institution": "A"}])[0].investments == []

    def test_to_list_matches_to_dict(self, sample_ledger) -> None:
        assert institutions_to_list(sample_ledger) == [i.to_dict() for i in sample_ledger]

    @pytest.mark.parametrize(
        "payload",
        [
            {"institution": "A"},
            ["A"],
            [{"investments": []}],
            [{"institution": "", "investments": []}],
            [{"institution": "A", "investments": {}}],
            [{"institution": "A", "investments": ["x"]}],
            [{"institution": "A"}, {"institution": "A"}],
        ],
    )
    def test_malformed_structure(self, payload) -> None:
        with pytest.raises(DeserializationError):
            institutions_from_list(payload)

    def test_missing_field(self) -> None:
        with pytest.raises(DeserializationError, match="amount_after_investment"):
            institutions_from_list([
                {
                    "institution": "A",
                    "investments": [
                        {"date": "2024-01-01", "amount_before_investment": "1"}
                    ],
                }
            ])

    def test_invalid_amount(self) -> None:
        with pytest.raises(DeserializationError):
            institutions_from_list([
                {
                    "institution": "A",
                    "investments": [
                        {
                            "date": "2024-01-01",
                            "amount_before_investment": "-1",
                            "amount_after_investment": "1",
                        }
                    ],
                }
            ])

    def test_unsorted_records_rejected(self) -> None:
        """날짜 역순 기록은 보정하지 않고 실패"""
        with pytest.raises(DeserializationError, match="sorted"):
            institutions_from_list([
                {
                    "institution": "A",
                    "investments": [
                        {
                            "date": "2024-02-01",
                            "amount_before_investment": "1",
                            "amount_after_investment": "1",
                        },
                        {
                            "date": "2024-01-01",
                            "amount_before_investment": "1",
                            "amount_after_investment": "1",
                        },
                    ],
                }
            ])

    def test_duplicate_dates_rejected(self) -> None:
        record = {
            "date": "2024-01-01",
            "amount_before_investment": "1",
            "amount_after_investment": "1",
        }
        with pytest.raises(DeserializationError):
            institutions_from_list([{"institution": "A", "investments": [record, record]}])


class TestRemoteDocument:
    """to_remote_document / from_remote_document 테스트"""

    def test_document_shape(self, sample_ledger) -> None:
        document = to_remote_document(sample_ledger)

        assert list(document) == ["institutions"]
        assert document["institutions"][0]["institution"] == "Broker A"

    def test_round_trip(self, sample_ledger) -> None:
        assert from_remote_document(to_remote_document(sample_ledger)) == sample_ledger

    @pytest.mark.parametrize("document", [None, [], {}, {"other": []}])
    def test_malformed_document(self, document) -> None:
        with pytest.raises(DeserializationError):
            from_remote_document(document)
