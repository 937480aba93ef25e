"""
REST API routes for Digital Archaeology story mode.
Mindset management and anachronism filtering for the scene renderer.
"""

import logging
from flask import Blueprint, request, jsonify, current_app

from anachronism_filter import FilterMode
from eras import ERAS, create_era_filter
from mindset import MindsetContext

logger = logging.getLogger(__name__)

api = Blueprint('api', __name__, url_prefix='/api')


def get_story_session():
    """The StorySession the app was created with."""
    return current_app.extensions['story_session']


def build_filter(data):
    """
    Filter for a request body.

    `eraFilter: true` starts from the seeded era terms; `customTerms` adds
    [{term, introducedYear, replacement}] on top.
    """
    session = get_story_session()
    if data.get('eraFilter'):
        year = optional_int(data.get('year'))
        if year is None:
            year = session.store.current_year()
        text_filter = create_era_filter(year, store=session.store)
    else:
        text_filter = session.new_filter()

    for entry in data.get('customTerms') or []:
        text_filter.add_custom_term(
            entry['term'],
            int(entry['introducedYear']),
            entry.get('replacement'),
        )
    return text_filter


def optional_int(value):
    if value is None:
        return None
    return int(value)


# ==================== Health Check ====================

@api.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


# ==================== Eras ====================

@api.route('/eras', methods=['GET'])
def list_eras():
    return jsonify([{
        'id': era['id'],
        'name': era['name'],
        'year': era['year'],
        'location': era['location'],
    } for era in ERAS])


# ==================== Mindset ====================

@api.route('/mindset', methods=['GET'])
def get_mindset():
    return jsonify(get_story_session().get_state())


@api.route('/mindset', methods=['PUT'])
def set_mindset():
    try:
        data = request.get_json(silent=True) or {}
        if 'year' not in data:
            return jsonify({'error': 'Missing required fields'}), 400

        context = MindsetContext.from_dict(data)
        session = get_story_session()
        session.set_mindset(context)
        return jsonify(session.get_state())
    except (TypeError, ValueError) as e:
        logger.error(f"Set mindset error: {e}")
        return jsonify({'error': 'Invalid mindset'}), 400
    except Exception as e:
        logger.error(f"Set mindset error: {e}")
        return jsonify({'error': 'Failed to set mindset'}), 500


@api.route('/mindset', methods=['DELETE'])
def clear_mindset():
    try:
        get_story_session().clear_mindset()
        return jsonify({'success': True})
    except Exception as e:
        logger.error(f"Clear mindset error: {e}")
        return jsonify({'error': 'Failed to clear mindset'}), 500


@api.route('/mindset/era/<era_id>', methods=['POST'])
def enter_era(era_id):
    try:
        session = get_story_session()
        if session.enter_era(era_id) is None:
            return jsonify({'error': 'Era not found'}), 404
        return jsonify(session.get_state())
    except Exception as e:
        logger.error(f"Enter era error: {e}")
        return jsonify({'error': 'Failed to enter era'}), 500


@api.route('/session/reset', methods=['POST'])
def reset_session():
    try:
        get_story_session().reset()
        return jsonify({'success': True})
    except Exception as e:
        logger.error(f"Reset session error: {e}")
        return jsonify({'error': 'Failed to reset session'}), 500


# ==================== Filtering ====================

@api.route('/filter/analyze', methods=['POST'])
def analyze_text():
    try:
        data = request.get_json(silent=True) or {}
        text = data.get('text')
        if text is None:
            return jsonify({'error': 'Missing required fields'}), 400

        text_filter = build_filter(data)
        result = text_filter.analyze(
            text,
            mode=FilterMode.parse(data.get('mode', FilterMode.ANALYZE.value)),
            year=optional_int(data.get('year')),
            case_insensitive=data.get('caseInsensitive', True),
        )
        return jsonify(result.to_dict())
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Analyze error: {e}")
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Analyze error: {e}")
        return jsonify({'error': 'Failed to analyze text'}), 500


@api.route('/filter/check', methods=['POST'])
def check_term():
    try:
        data = request.get_json(silent=True) or {}
        term = data.get('term')
        if not term:
            return jsonify({'error': 'Missing required fields'}), 400

        year = optional_int(data.get('year'))
        session = get_story_session()
        text_filter = build_filter(data)
        return jsonify({
            'term': term,
            'year': year if year is not None else session.store.current_year(),
            'is_anachronism': text_filter.is_anachronism(term, year),
            'period_term': text_filter.get_period_term(term),
            'timeline_anachronism': session.store.is_anachronism(term, year),
        })
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Check term error: {e}")
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Check term error: {e}")
        return jsonify({'error': 'Failed to check term'}), 500


@api.route('/filter/period-term', methods=['GET'])
def period_term():
    term = request.args.get('term')
    if not term:
        return jsonify({'error': 'Missing required fields'}), 400

    store = get_story_session().store
    return jsonify({
        'term': term,
        'year': store.current_year(),
        'period_term': store.get_period_term(term),
    })


# ==================== Scenes ====================

@api.route('/scene/filter', methods=['POST'])
def filter_scene():
    try:
        data = request.get_json(silent=True) or {}
        scene = data.get('scene')
        if not isinstance(scene, dict):
            return jsonify({'error': 'Missing required fields'}), 400

        scene_filter = get_story_session().scene_filter(enabled=data.get('enabled', True))
        return jsonify({'scene': scene_filter.filter_scene(scene)})
    except Exception as e:
        logger.error(f"Filter scene error: {e}")
        return jsonify({'error': 'Failed to filter scene'}), 500
