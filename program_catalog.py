#!/usr/bin/env python3
"""
Event Registration System - static program catalog and normalization

The live programs table decides what a new registrant may pick. The tables in
this module only resolve identifiers that are already stored on registrations:
legacy aliases, display labels and the stage / non-stage split.
"""

JUNIOR_PROGRAMS = {
    'stage': [
        'junior-qiraat',
        'junior-bank',
        'junior-speech-arabic',
        'junior-speech-english',
        'junior-speech-malayalam',
        'junior-speech-urdu',
        'junior-song-arabic',
    ],
    'non_stage': [
        'junior-drawing',
        'junior-sudoku',
        'junior-memory-test',
        'junior-dictation',
    ],
}

SENIOR_PROGRAMS = {
    'stage': [
        'senior-qiraat',
        'senior-bank',
        'senior-class-presentation',
        'senior-speech-arabic',
        'senior-speech-english',
        'senior-speech-malayalam',
    ],
    'non_stage': [
        'senior-arabic-calligraphy',
        'senior-poster-making',
        'senior-arabic-essay',
        'senior-malayalam-essay',
        'senior-english-essay',
    ],
}

PROGRAMS_BY_CATEGORY = {
    'junior': JUNIOR_PROGRAMS,
    'senior': SENIOR_PROGRAMS,
}

PROGRAM_LABELS = {
    'junior-qiraat': 'ഖിറാഅത്ത്',
    'junior-bank': 'ബാങ്ക്',
    'junior-speech-arabic': 'പ്രസംഗം അറബി',
    'junior-speech-english': 'പ്രസംഗം ഇംഗ്ലീഷ്',
    'junior-speech-malayalam': 'പ്രസംഗം മലയാളം',
    'junior-speech-urdu': 'പ്രസംഗം ഉറുദു',
    'junior-song-arabic': 'ഗാനം അറബി',
    'junior-drawing': 'ചിത്രരചന',
    'junior-sudoku': 'സുഡോക്കും',
    'junior-memory-test': 'മെമ്മറി ടെസ്റ്റ്',
    'junior-dictation': 'കേട്ടെഴുത്ത്',
    'senior-qiraat': 'ഖിറാഅത്ത്',
    'senior-bank': 'ബാങ്ക്',
    'senior-class-presentation': 'ക്ലാസ് അവതരണം',
    'senior-speech-arabic': 'പ്രസംഗം അറബി',
    'senior-speech-english': 'പ്രസംഗം ഇംഗ്ലീഷ്',
    'senior-speech-malayalam': 'പ്രസംഗം മലയാളം',
    'senior-arabic-calligraphy': 'അറബിക് ആലിഗ്രാഫി',
    'senior-poster-making': 'പോസ്റ്റർ മേക്കിങ്',
    'senior-arabic-essay': 'അറബി പ്രബന്ധം',
    'senior-malayalam-essay': 'മലയാളം പ്രബന്ധം',
    'senior-english-essay': 'ഇംഗ്ലീഷ് പ്രബന്ധം',
}

# Identifiers from the first catalog version and common misspellings.
# Every value must be a canonical id (never another alias).
LEGACY_PROGRAM_ALIASES = {
    'qiraat': 'junior-qiraat',
    'bank': 'junior-bank',
    'speech-arabic': 'junior-speech-arabic',
    'speech-english': 'junior-speech-english',
    'speech-malayalam': 'junior-speech-malayalam',
    'speech-urdu': 'junior-speech-urdu',
    'song-arabic': 'junior-song-arabic',
    'drawing': 'junior-drawing',
    'sudoku': 'junior-sudoku',
    'memory-test': 'junior-memory-test',
    'dictation': 'junior-dictation',
    'class-presentation': 'senior-class-presentation',
    'arabic-calligraphy': 'senior-arabic-calligraphy',
    'poster-making': 'senior-poster-making',
    'arabic-essay': 'senior-arabic-essay',
    'malayalam-essay': 'senior-malayalam-essay',
    'english-essay': 'senior-english-essay',

    'qirat': 'junior-qiraat',
    "qira'at": 'junior-qiraat',
    'presentation': 'senior-class-presentation',
    'calligraphy': 'senior-arabic-calligraphy',
    'poster': 'senior-poster-making',
    'essay-arabic': 'senior-arabic-essay',
    'essay-malayalam': 'senior-malayalam-essay',
    'essay-english': 'senior-english-essay',
}

EMPTY_LABEL = '-'

_STAGE_IDS = frozenset(JUNIOR_PROGRAMS['stage'] + SENIOR_PROGRAMS['stage'])
_NON_STAGE_IDS = frozenset(JUNIOR_PROGRAMS['non_stage'] + SENIOR_PROGRAMS['non_stage'])


def normalize_program_id(program_id):
    """Resolve a legacy alias to its canonical id; anything else passes through."""
    return LEGACY_PROGRAM_ALIASES.get(program_id, program_id)


def normalize_program_ids(program_ids):
    return [normalize_program_id(program_id) for program_id in program_ids or []]


def get_program_label(program_id):
    """Display label for a stored program token.

    Unknown tokens are returned verbatim so historical data still renders.
    """
    if program_id is None or program_id == '':
        return EMPTY_LABEL
    normalized = normalize_program_id(program_id)
    return PROGRAM_LABELS.get(normalized, str(program_id))


def get_program_labels(program_ids):
    return [get_program_label(program_id) for program_id in program_ids or []]


def is_stage_program(program_id):
    return normalize_program_id(program_id) in _STAGE_IDS


def is_non_stage_program(program_id):
    return normalize_program_id(program_id) in _NON_STAGE_IDS


def categorize_programs(program_ids):
    """Split program tokens into stage / non_stage / invalid buckets.

    Tokens are normalized first and keep their input order inside each bucket.
    """
    result = {'stage': [], 'non_stage': [], 'invalid': []}
    for program_id in normalize_program_ids(program_ids):
        if program_id in _STAGE_IDS:
            result['stage'].append(program_id)
        elif program_id in _NON_STAGE_IDS:
            result['non_stage'].append(program_id)
        else:
            result['invalid'].append(program_id)
    return result


def get_valid_programs_for_category(category):
    programs = PROGRAMS_BY_CATEGORY.get(category)
    if not programs:
        return set()
    return set(programs['stage']) | set(programs['non_stage'])


def get_program_type(program_id):
    """'stage', 'non-stage' or None for ids outside the static catalog."""
    if is_stage_program(program_id):
        return 'stage'
    if is_non_stage_program(program_id):
        return 'non-stage'
    return None


def catalog_snapshot():
    """Static tables in wire format, for clients rendering stored registrations."""
    return {
        'aliases': dict(LEGACY_PROGRAM_ALIASES),
        'labels': dict(PROGRAM_LABELS),
        'categories': {
            category: {
                'stage': list(programs['stage']),
                'nonStage': list(programs['non_stage']),
            }
            for category, programs in PROGRAMS_BY_CATEGORY.items()
        },
    }


def _build_default_programs():
    programs = []
    for category, groups in PROGRAMS_BY_CATEGORY.items():
        order = 0
        for group, program_type in (('stage', 'stage'), ('non_stage', 'non-stage')):
            for program_id in groups[group]:
                order += 1
                programs.append({
                    'program_id': program_id,
                    'name': PROGRAM_LABELS[program_id],
                    'category': category,
                    'type': program_type,
                    'is_active': True,
                    'display_order': order,
                })
    return programs


# Seed rows for an empty programs table
DEFAULT_PROGRAMS = _build_default_programs()
