"""
원장 직렬화

로컬 캐시(JSON 리스트)와 원격 문서({"institutions": [...]}) 공통 변환.
형식이 잘못된 페이로드는 조용히 보정하지 않고 DeserializationError로 실패.
"""

import json
from typing import Any

from core.constants import RemoteDocument
from core.errors import DeserializationError, InvalidRecordError
from core.ledger.models import InstitutionData, InvestmentRecord


def institutions_to_list(institutions: list[InstitutionData]) -> list[dict[str, Any]]:
    """원장 → JSON 호환 리스트"""
    return [inst.to_dict() for inst in institutions]


def institutions_from_list(data: Any) -> list[InstitutionData]:
    """JSON 호환 리스트 → 원장

    기관 내 기록은 날짜순으로 정렬되어 있어야 하며 날짜 중복 불가.
    기관명 중복 불가.

    Raises:
        DeserializationError: 구조/값이 잘못된 경우
    """
    if not isinstance(data, list):
        raise DeserializationError(
            f"Ledger payload must be a list, got {type(data).__name__}"
        )

    institutions: list[InstitutionData] = []
    seen: set[str] = set()

    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise DeserializationError(f"Institution #{i} must be an object")

        name = item.get("institution")
        if not isinstance(name, str) or not name:
            raise DeserializationError(f"Institution #{i} has no valid 'institution' name")
        if name in seen:
            raise DeserializationError(f"Duplicate institution in payload: {name}")
        seen.add(name)

        raw_records = item.get("investments", [])
        if not isinstance(raw_records, list):
            raise DeserializationError(f"'{name}'.investments must be a list")

        records: list[InvestmentRecord] = []
        for j, raw in enumerate(raw_records):
            if not isinstance(raw, dict):
                raise DeserializationError(f"'{name}' record #{j} must be an object")
            try:
                record = InvestmentRecord.create(
                    date=raw["date"],
                    amount_before_investment=raw["amount_before_investment"],
                    amount_after_investment=raw["amount_after_investment"],
                )
            except KeyError as e:
                raise DeserializationError(
                    f"'{name}' record #{j} is missing field {e.args[0]!r}"
                ) from e
            except InvalidRecordError as e:
                raise DeserializationError(f"'{name}' record #{j}: {e}") from e

            if records and record.date <= records[-1].date:
                raise DeserializationError(
                    f"'{name}' records are not sorted/unique by date at #{j} ({record.date})"
                )
            records.append(record)

        institutions.append(InstitutionData(institution=name, investments=records))

    return institutions


def dumps_ledger(institutions: list[InstitutionData]) -> str:
    """원장 → JSON 문자열 (로컬 캐시 값)"""
    return json.dumps(institutions_to_list(institutions), ensure_ascii=False)


def loads_ledger(text: str) -> list[InstitutionData]:
    """JSON 문자열 → 원장

    Raises:
        DeserializationError: JSON 파싱 실패 또는 구조 오류
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise DeserializationError(f"Invalid ledger JSON: {e}") from e
    return institutions_from_list(data)


def to_remote_document(institutions: list[InstitutionData]) -> dict[str, Any]:
    """원장 → 원격 문서"""
    return {RemoteDocument.FIELD: institutions_to_list(institutions)}


def from_remote_document(document: Any) -> list[InstitutionData]:
    """원격 문서 → 원장

    Raises:
        DeserializationError: 문서 형식 오류
    """
    if not isinstance(document, dict) or RemoteDocument.FIELD not in document:
        raise DeserializationError(
            f"Remote document must be an object with '{RemoteDocument.FIELD}'"
        )
    return institutions_from_list(document[RemoteDocument.FIELD])
