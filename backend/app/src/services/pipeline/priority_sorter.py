"""Order pipeline leads by how urgently they need an agent's attention.

A lead's priority is the sum of three independent signals:

- stage: how close the lead is to closing; closed leads weigh little so they
  sink to the bottom of an active worklist.
- tags: the highest weight among the lead's tags (max, not sum).
- urgency: how close the next follow-up date is, compared by calendar day
  in the timezone of ``now``.

Ties are broken by creation date, newest first, and then by input order.
``now`` is always passed in by the caller.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from src.models.lead_models import Lead, LeadScore, LeadStatus, LeadTag, SortMode

STAGE_WEIGHTS: Dict[str, int] = {
    # compromis signed
    LeadStatus.DEPOSIT.value: 100,
    LeadStatus.SIGNED.value: 100,
    LeadStatus.MANDAT_SIGNE.value: 100,
    # visit / offer
    LeadStatus.VISIT.value: 80,
    LeadStatus.OFFER.value: 80,
    LeadStatus.OFFRE.value: 80,
    LeadStatus.MANDAT_PROPOSE.value: 80,
    # qualified / proposal
    LeadStatus.QUALIFIED.value: 60,
    LeadStatus.PROPOSAL.value: 60,
    LeadStatus.QUALIFICATION.value: 60,
    # new / contacted
    LeadStatus.NEW.value: 40,
    LeadStatus.CONTACTED.value: 40,
    LeadStatus.NOUVEAU_CONTACT.value: 40,
    # closed or dormant
    LeadStatus.WON.value: 10,
    LeadStatus.LOST.value: 10,
    LeadStatus.MANDAT_EXPIRE.value: 10,
    LeadStatus.INACTIF.value: 10,
}
UNKNOWN_STAGE_WEIGHT = 30

TAG_WEIGHTS: Dict[str, int] = {
    LeadTag.VIP.value.lower(): 25,
    LeadTag.HOT.value.lower(): 20,
    LeadTag.SERIOUS.value.lower(): 15,
    LeadTag.COLD.value.lower(): 8,
    LeadTag.NO_RESPONSE.value.lower(): 5,
    LeadTag.NO_PHONE.value.lower(): 3,
    LeadTag.FAKE.value.lower(): 1,
}

OVERDUE_WEIGHT = 30
DUE_TODAY_WEIGHT = 20
DUE_THIS_WEEK_WEIGHT = 10
DUE_LATER_WEIGHT = 5
THIS_WEEK_DAYS = 7

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_date(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 value; anything unparseable reads as no date."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _timestamp(value: Any) -> Optional[float]:
    parsed = parse_date(value)
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.timestamp()
    except (OverflowError, OSError, ValueError):
        return None


def _created_timestamp(lead: Lead) -> float:
    created = _timestamp(lead.created_at)
    return EPOCH.timestamp() if created is None else created


def _calendar_day(value: Any, now: datetime) -> Optional[date]:
    parsed = parse_date(value)
    if parsed is None:
        return None

    if now.tzinfo is not None:
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=now.tzinfo)
        try:
            return parsed.astimezone(now.tzinfo).date()
        except (OverflowError, ValueError):
            return None

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except (OverflowError, ValueError):
            return None
    return parsed.date()


def stage_score(lead: Lead) -> int:
    return STAGE_WEIGHTS.get(lead.status, UNKNOWN_STAGE_WEIGHT)


def tag_score(lead: Lead) -> int:
    """Highest weight among the lead's tags; 0 when none is recognized."""
    weights = [TAG_WEIGHTS.get(tag.strip().lower(), 0) for tag in lead.tags or []]
    return max(weights, default=0)


def urgency_score(lead: Lead, now: datetime) -> int:
    """Weight the next follow-up date against ``now`` by calendar day."""
    due = _calendar_day(lead.next_follow_up_date, now)
    if due is None:
        return 0

    days_left = (due - now.date()).days
    if days_left < 0:
        return OVERDUE_WEIGHT
    if days_left == 0:
        return DUE_TODAY_WEIGHT
    if days_left <= THIS_WEEK_DAYS:
        return DUE_THIS_WEEK_WEIGHT
    return DUE_LATER_WEIGHT


def priority_score(lead: Lead, now: datetime) -> int:
    return stage_score(lead) + tag_score(lead) + urgency_score(lead, now)


def explain_score(lead: Lead, now: datetime) -> LeadScore:
    stage = stage_score(lead)
    tags = tag_score(lead)
    urgency = urgency_score(lead, now)
    return LeadScore(
        lead_id=lead.id,
        stage=stage,
        tags=tags,
        urgency=urgency,
        total=stage + tags + urgency,
    )


def _follow_up_key(lead: Lead) -> Tuple[int, float]:
    due = _timestamp(lead.next_follow_up_date)
    return (1, 0.0) if due is None else (0, due)


def _sort_key(mode: SortMode, now: datetime) -> Callable[[Lead], Tuple[Any, ...]]:
    if mode is SortMode.STAGE:
        return lambda lead: (-stage_score(lead), -_created_timestamp(lead))
    if mode is SortMode.URGENCY:
        return lambda lead: (
            -urgency_score(lead, now),
            _follow_up_key(lead),
            -_created_timestamp(lead),
        )
    if mode is SortMode.TAGS:
        return lambda lead: (-tag_score(lead), -_created_timestamp(lead))
    if mode is SortMode.NEWEST:
        return lambda lead: (-_created_timestamp(lead),)
    if mode is SortMode.OLDEST:
        return lambda lead: (_created_timestamp(lead),)
    return lambda lead: (-priority_score(lead, now), -_created_timestamp(lead))


def _as_sort_mode(mode: Union[SortMode, str, None]) -> SortMode:
    if isinstance(mode, SortMode):
        return mode
    try:
        return SortMode(mode)
    except ValueError:
        return SortMode.PRIORITY


def score_and_sort(
    leads: Iterable[Lead],
    mode: Union[SortMode, str, None] = SortMode.PRIORITY,
    now: Optional[datetime] = None,
) -> List[Lead]:
    """Return a new list of leads ordered for the pipeline view.

    Args:
        leads: Leads to order; the input is left untouched.
        mode: One of ``SortMode``; unknown values fall back to priority.
        now: Reference time for the urgency signal. Defaults to the current
            UTC time when omitted.

    Returns:
        List[Lead]: Leads in display order. Equal keys keep their input order.
    """
    reference = now or datetime.now(timezone.utc)
    return sorted(leads, key=_sort_key(_as_sort_mode(mode), reference))
