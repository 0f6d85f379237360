# Ghost - node.py
# Copyright (C) 2026 The Ghost Contributors

import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS

from ghost.actions import ActionGroup, log_say
from ghost.config import CONCEPT_DB_PATH, NODE_PORT
from ghost.ghost_logger import setup_logger
from ghost.lexicon import Lexicon
from ghost.pattern import WordNode, fragment_to_json
from ghost.rulebase import RuleBase
from ghost.runtime import GhostRuntime
from ghost.terms import VariableNamer, compile_term, term_from_json

logger = logging.getLogger("node")

app = Flask(__name__)
CORS(app, supports_credentials=True, resources={r"/*": {"origins": "*"}})
node_instance = None


class GhostNode:
    """One dialogue session served over HTTP."""

    def __init__(self, lexicon: Lexicon | None = None, concept_db: str | None = None):
        self.lexicon = lexicon if lexicon is not None else Lexicon.from_model()
        self.concept_db = concept_db
        if concept_db and os.path.exists(concept_db):
            self.lexicon.load(concept_db)
        self.said: list[str] = []
        self.runtime = GhostRuntime(self.lexicon, say=self._say)
        self.rulebase = RuleBase()

    def _say(self, text: str) -> None:
        log_say(text)
        self.said.append(text)

    def define_concept(self, name: str, members) -> list:
        parsed = self.lexicon.define_concept(name, members)
        if self.concept_db:
            self.lexicon.persist(self.concept_db)
        return parsed


def action_from_json(data):
    """Strings are words, lists are groups, `{"kind": "group", "items": [...]}` nests."""
    if isinstance(data, str):
        return WordNode(data)
    if isinstance(data, list):
        return ActionGroup(tuple(action_from_json(d) for d in data))
    if isinstance(data, dict):
        kind = str(data.get("kind", "")).lower()
        if kind == "word":
            return WordNode(str(data.get("text", "")))
        if kind == "group":
            return ActionGroup(tuple(action_from_json(d) for d in data.get("items", [])))
    # Anything else is carried through and ignored when rendering.
    return data


def _require_node():
    if node_instance is None:
        return jsonify({"error": "Node is not initialized"}), 503
    return None


@app.errorhandler(ValueError)
def handle_bad_term(error):
    return jsonify({"error": str(error)}), 400


@app.route("/health", methods=["GET"])
def handle_health():
    not_ready = _require_node()
    if not_ready:
        return not_ready
    return jsonify(
        {
            "status": "ok",
            "nlp_model": node_instance.lexicon.nlp is not None,
            "concepts": len(node_instance.lexicon.concepts()),
            "state": node_instance.runtime.anchor.state,
        }
    )


@app.route("/compile", methods=["POST"])
def handle_compile():
    not_ready = _require_node()
    if not_ready:
        return not_ready
    payload = request.get_json(silent=True) or {}
    try:
        term = term_from_json(payload.get("term"))
        fragment = compile_term(term, node_instance.lexicon, VariableNamer())
    except TypeError as e:
        raise ValueError(str(e)) from e
    return jsonify(fragment_to_json(fragment))


@app.route("/concepts", methods=["POST"])
def handle_define_concept():
    not_ready = _require_node()
    if not_ready:
        return not_ready
    payload = request.get_json(silent=True) or {}
    name = str(payload.get("name", "")).strip()
    members = payload.get("members", [])
    if not name or not isinstance(members, list):
        raise ValueError("A concept needs a 'name' and a list of 'members'")
    parsed = node_instance.define_concept(name, members)
    return jsonify({"name": name, "members": [type(m).__name__ for m in parsed]})


@app.route("/utterance", methods=["POST"])
def handle_utterance():
    not_ready = _require_node()
    if not_ready:
        return not_ready
    payload = request.get_json(silent=True) or {}
    node_instance.runtime.anchor.set_utterance(payload.get("text", ""))
    return jsonify({"utterance": node_instance.runtime.anchor.utterance})


@app.route("/negation", methods=["POST"])
def handle_negation():
    not_ready = _require_node()
    if not_ready:
        return not_ready
    payload = request.get_json(silent=True) or {}
    terms = [term_from_json(t) for t in payload.get("terms", [])]
    tv = node_instance.runtime.negation(terms)
    return jsonify({"holds": tv.strength == 1.0})


@app.route("/execute", methods=["POST"])
def handle_execute():
    not_ready = _require_node()
    if not_ready:
        return not_ready
    payload = request.get_json(silent=True) or {}
    content = [action_from_json(a) for a in payload.get("actions", [])]
    said = node_instance.runtime.execute_action(*content)
    return jsonify({"said": said, "state": node_instance.runtime.anchor.state})


@app.route("/variables/<name>", methods=["GET", "PUT"])
def handle_user_variable(name):
    not_ready = _require_node()
    if not_ready:
        return not_ready
    store = node_instance.runtime.store
    if request.method == "PUT":
        payload = request.get_json(silent=True) or {}
        store.set_user_variable(name, payload.get("value"))
    value = store.get_user_variable(name)
    return jsonify(
        {
            "name": name,
            "exists": store.user_variable_exists(name),
            "value": list(value) if isinstance(value, tuple) else value,
        }
    )


def main():
    global node_instance
    setup_logger()
    logger.info("Starting Ghost node...")
    node_instance = GhostNode(concept_db=CONCEPT_DB_PATH)
    app.run(host="0.0.0.0", port=NODE_PORT, debug=False)


if __name__ == "__main__":
    main()
