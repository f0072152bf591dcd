import math
from datetime import date, datetime

from .enums import (
    Bias,
    DailyBias,
    EntryModel,
    Framework,
    Mood,
    Outcome,
    Pair,
    Profiling,
    Session,
    is_entry_model_allowed,
)
from .errors import ValidationError

CHOICE_FIELDS = {
    'session': Session,
    'pair': Pair,
    'bias': Bias,
    'bias_daily': DailyBias,
    'framework': Framework,
    'profiling': Profiling,
    'entry_model': EntryModel,
    'result': Outcome,
    'mood': Mood,
}

REQUIRED_FIELDS = ('trade_date', 'rr', 'image_url') + tuple(CHOICE_FIELDS)

# Fields the owner may change on an existing trade.
EDITABLE_FIELDS = REQUIRED_FIELDS + ('description', 'tags')


def parse_trade_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError(f"Invalid trade date: {value!r}", field='trade_date')


def parse_rr(value):
    try:
        rr = float(str(value).replace('R', '').strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid RR value: {value!r}", field='rr')
    if not math.isfinite(rr):
        raise ValidationError(f"Invalid RR value: {value!r}", field='rr')
    return rr


def parse_tags(value):
    if value is None:
        return None
    if isinstance(value, str):
        tags = [t.strip() for t in value.split(',')]
    else:
        tags = [str(t).strip() for t in value]
    tags = [t for t in tags if t]
    return tags or None


def correct_sign(result, rr):
    """Force the RR sign to agree with the outcome: Win >= 0, Lose <= 0."""
    if result == Outcome.WIN.value:
        return abs(rr)
    if result == Outcome.LOSE.value:
        return -abs(rr)
    return rr


def _blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def clean_trade_fields(raw, current=None):
    """Validate submitted trade fields and return column values.

    With ``current`` (an existing trade) the submission is a partial edit:
    absent fields keep their stored value, and only the fields that change
    are returned. Without it every required field must be present.
    """
    raw = raw or {}
    cleaned = {}

    for name in EDITABLE_FIELDS:
        if name not in raw:
            continue
        value = raw[name]
        if name in REQUIRED_FIELDS and _blank(value):
            raise ValidationError(f"{name} is required", field=name)

        if name == 'trade_date':
            cleaned[name] = parse_trade_date(value)
        elif name == 'rr':
            cleaned[name] = parse_rr(value)
        elif name == 'tags':
            cleaned[name] = parse_tags(value)
        elif name == 'description':
            cleaned[name] = (value.strip() or None) if isinstance(value, str) else value
        elif name in CHOICE_FIELDS:
            choice = CHOICE_FIELDS[name].parse(value)
            if choice is None:
                allowed = ', '.join(CHOICE_FIELDS[name].values())
                raise ValidationError(f"Invalid {name} {value!r}; expected one of: {allowed}", field=name)
            cleaned[name] = choice.value
        else:
            cleaned[name] = str(value).strip()

    if current is None:
        for name in REQUIRED_FIELDS:
            if name not in cleaned:
                raise ValidationError(f"{name} is required", field=name)

    def merged(name):
        if name in cleaned:
            return cleaned[name]
        return getattr(current, name, None) if current is not None else None

    profiling, entry_model = merged('profiling'), merged('entry_model')
    if ('profiling' in cleaned or 'entry_model' in cleaned) and not is_entry_model_allowed(profiling, entry_model):
        raise ValidationError(
            f"Entry model {entry_model!r} is not available for {profiling!r}",
            field='entry_model',
        )

    if 'rr' in cleaned or 'result' in cleaned:
        rr = merged('rr')
        if rr is not None:
            fixed = correct_sign(merged('result'), rr)
            if 'rr' in cleaned or fixed != rr:
                cleaned['rr'] = fixed

    return cleaned
