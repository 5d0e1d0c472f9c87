import logging
from collections.abc import Iterable

from pydantic import ValidationError

from shared.models.match import MatchInfoModel, MatchResponseModel

logger = logging.getLogger(__name__)


def parse_match(raw: dict) -> MatchInfoModel | None:
    """
    Validates one raw match payload into a MatchInfoModel.

    Accepts either the full match detail response ({"metadata", "info"})
    or a bare info object. Returns None for payloads the aggregation
    cannot use: non-dicts, no participant list, or a failed validation.
    Missing or non-list unit item fields are normalized to [] by the model.
    """
    if not isinstance(raw, dict):
        logger.warning("Skipping match payload of type %s", type(raw).__name__)
        return None

    try:
        if "info" in raw:
            info = MatchResponseModel.model_validate(raw).info
        else:
            info = MatchInfoModel.model_validate(raw)
    except ValidationError as e:
        match_id = (raw.get("metadata") or {}).get("match_id", "?")
        logger.warning("Skipping match %s: %d validation errors", match_id, e.error_count())
        return None

    if info.participants is None:
        logger.debug("Skipping match without participants")
        return None

    return info


def parse_matches(raws: Iterable[dict]) -> list[MatchInfoModel]:
    """
    Parses a batch of raw payloads, dropping the ones parse_match rejects.
    """
    parsed = []
    for raw in raws:
        info = parse_match(raw)
        if info is not None:
            parsed.append(info)
    return parsed
