"""JSON API used by the browser client."""

import logging

from flask import Blueprint, jsonify, request
from marshmallow import EXCLUDE, Schema, ValidationError, fields, pre_load, validate

from . import openai_client, synthesis
from .transcription import transcribe_audio

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api')


class InterviewTurnSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    question = fields.Str(load_default="")
    answer = fields.Str(load_default="")

    @pre_load
    def coerce_text(self, data, **kwargs):
        return {key: "" if data.get(key) is None else str(data[key]) for key in ('question', 'answer')}


class BriefSchema(Schema):
    """Base request schema: ``brief`` is required, optional list fields are lenient.

    A list field named in ``list_fields`` that is not a list is treated as
    absent, and ``turn_fields`` keep only object entries.
    """
    list_fields = ()
    turn_fields = ()

    class Meta:
        unknown = EXCLUDE

    brief = fields.Str(required=True, validate=validate.Length(min=1))

    @pre_load
    def normalize(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if isinstance(data.get('brief'), str):
            data['brief'] = data['brief'].strip()
        for name in self.list_fields:
            if name in data and not isinstance(data[name], list):
                del data[name]
        for name in self.turn_fields:
            if name in data:
                data[name] = [turn for turn in data[name] if isinstance(turn, dict)]
        return data


class InterviewRequestSchema(BriefSchema):
    list_fields = ('history',)
    turn_fields = ('history',)

    history = fields.List(fields.Nested(InterviewTurnSchema), load_default=list)


class PreviewRequestSchema(BriefSchema):
    list_fields = ('interview', 'feedback')
    turn_fields = ('interview',)

    interview = fields.List(fields.Nested(InterviewTurnSchema), load_default=list)
    feedback = fields.List(fields.Raw(allow_none=True), load_default=None)


class GenerateRequestSchema(PreviewRequestSchema):
    list_fields = ('interview', 'feedback', 'interviewSummary', 'featureOverrides')

    interviewSummary = fields.List(fields.Raw(allow_none=True), load_default=None)
    featureOverrides = fields.List(fields.Raw(allow_none=True), load_default=None)


def _load(schema, required_message):
    """Validate the JSON body; returns ``(data, None)`` or ``(None, error_response)``."""
    try:
        return schema.load(request.get_json(silent=True) or {}), None
    except ValidationError as e:
        logger.warning(f"Rejected {request.path}: {e.messages}")
        if 'brief' in e.messages:
            return None, (jsonify({'error': required_message}), 400)
        return None, (jsonify({'error': 'Invalid request', 'fields': e.messages}), 400)


@api_bp.route('/interview', methods=['POST'])
def interview():
    data, error = _load(InterviewRequestSchema(), 'Brief is required')
    if error:
        return error
    try:
        raw_step = openai_client.generate_interview_step(data['brief'], data['history'])
        step = openai_client.coerce_interview_step(raw_step)
        return jsonify(step.to_dict())
    except Exception:
        logger.exception("Interview step failed")
        return jsonify({'error': 'Interview failed'}), 500


@api_bp.route('/preview', methods=['POST'])
def preview():
    data, error = _load(PreviewRequestSchema(), 'Brief is required')
    if error:
        return error
    try:
        return jsonify(synthesis.build_preview(data['brief'], data['interview'], data['feedback']))
    except Exception:
        logger.exception("Preview failed")
        return jsonify({'error': 'Preview failed'}), 500


@api_bp.route('/generate', methods=['POST'])
def generate():
    data, error = _load(GenerateRequestSchema(), 'Brief is required')
    if error:
        return error
    try:
        result = synthesis.synthesize(
            data['brief'], data['interview'], data['interviewSummary'], data['feedback']
        )
        return jsonify(synthesis.build_artifacts(result, data['featureOverrides']))
    except Exception:
        logger.exception("Generation failed")
        return jsonify({'error': 'Generation failed'}), 500


@api_bp.route('/transcribe', methods=['POST'])
def transcribe():
    upload = request.files.get('file')
    audio = upload.read() if upload is not None else b""
    if not audio:
        return jsonify({'error': 'Missing audio file'}), 400
    try:
        text = transcribe_audio(upload.filename, audio, upload.mimetype)
        return jsonify({'text': text or ""})
    except Exception:
        logger.exception("Transcription failed")
        return jsonify({'error': 'Transcription failed'}), 500
