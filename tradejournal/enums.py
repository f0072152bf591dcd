from enum import Enum


class _Choice(str, Enum):
    """String-valued enum that compares equal to its stored column value."""

    def __str__(self):
        return self.value

    @classmethod
    def values(cls):
        return [member.value for member in cls]

    @classmethod
    def parse(cls, raw):
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except (TypeError, ValueError):
            return None


class Session(_Choice):
    LONDON = 'London'
    NEW_YORK = 'New York'


class Pair(_Choice):
    NQ = 'NQ'
    ES = 'ES'
    YM = 'YM'
    EU = 'EU'
    GU = 'GU'
    XAU = 'XAU'


class Bias(_Choice):
    BULLISH = 'Bullish'
    BEARISH = 'Bearish'


class DailyBias(_Choice):
    DNT = 'DNT'
    DCM = 'DCM'
    DFM = 'DFM'
    DCC = 'DCC'
    DRM = 'DRM'


class Framework(_Choice):
    IRL_TO_ERL = 'IRL to ERL'
    OPR = 'OPR'
    OB_TO_LIQ = 'OB to Liq'
    ERL_TO_IRL = 'ERL to IRL'


class Profiling(_Choice):
    REVERSAL_6AM = '6AM Reversal'
    CONTINUATION_6AM = '6AM Continuation'
    REVERSAL_10AM = '10AM Reversal'
    CONTINUATION_10AM = '10AM Continuation'

    @property
    def is_reversal(self):
        return 'Reversal' in self.value


class EntryModel(_Choice):
    DNT_1 = 'Entry Model 1 (DNT)'
    DNT_2 = 'Entry Model 2 (DNT)'
    DNT_3 = 'Entry Model 3 (DNT)'
    DCM_1 = 'Entry Model 1 (DCM)'
    DCM_2 = 'Entry Model 2 (DCM)'


class Outcome(_Choice):
    WIN = 'Win'
    LOSE = 'Lose'
    BREAK_EVEN = 'BreakEven'


class Mood(_Choice):
    CALM = 'Calm'
    ANXIOUS = 'Anxious'
    GREEDY = 'Greedy'
    FEAR = 'Fear'
    BORED = 'Bored'
    REVENGE = 'Revenge'


class ReviewStatus(_Choice):
    SUBMITTED = 'submitted'
    REVISION = 'revision'


class Role(_Choice):
    MEMBER = 'member'
    MENTOR = 'mentor'


DNT_ENTRY_MODELS = (EntryModel.DNT_1, EntryModel.DNT_2, EntryModel.DNT_3)
DCM_ENTRY_MODELS = (EntryModel.DCM_1, EntryModel.DCM_2)

# Reversal setups use the DNT models, continuation setups the DCM ones.
ENTRY_MODELS_BY_PROFILING = {
    profiling: DNT_ENTRY_MODELS if profiling.is_reversal else DCM_ENTRY_MODELS
    for profiling in Profiling
}

SCORE_LABELS = {
    5: 'Perfect Execution',
    4: 'Good',
    3: 'Neutral',
    2: 'Bad',
    1: 'Violation',
}


def entry_models_for(profiling):
    profiling = Profiling.parse(profiling)
    if profiling is None:
        return ()
    return ENTRY_MODELS_BY_PROFILING[profiling]


def is_entry_model_allowed(profiling, entry_model):
    entry_model = EntryModel.parse(entry_model)
    return entry_model is not None and entry_model in entry_models_for(profiling)


def score_label(score):
    return SCORE_LABELS.get(score, 'Unknown')


def format_rr(rr):
    sign = '+' if rr >= 0 else ''
    return f"{sign}{rr:.2f}R"
