# src/api.py
import datetime
import logging
from typing import Union

from flask import Flask, request, jsonify
from telegram import Update
from telegram.ext import Application

from src.core.analytics import DashboardAnalytics
from src.core.models import TransactionType, normalize_transaction_type
from src.core.portfolio import summarize_targets, summarize_assets_by_type, target_status
from src.core.repository import RecordNotFoundError
from src.utils.formatters import parse_month, parse_currency, to_iso_date, InvalidMonthError

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/webhook"
DELETABLE_ENTITIES = ('transactions', 'assets', 'targets')


def _error(message: str, status: int):
    return jsonify({"status": "error", "message": message}), status


def _saved(ok: bool, status: int = 201):
    if ok:
        return jsonify({"status": "ok"}), status
    return _error("Não foi possível gravar o registro.", 500)


def _payload_date(payload) -> Union[str, None]:
    """Data do corpo (YYYY-MM-DD) ou hoje; None se vier em outro formato."""
    value = payload.get('date')
    if not value:
        return to_iso_date(datetime.date.today())
    try:
        return to_iso_date(datetime.date.fromisoformat(str(value)))
    except ValueError:
        return None


def create_app(repository, ptb_application: Union[Application, None] = None) -> Flask:
    """
    Cria a aplicação Flask: API JSON do painel e, se houver bot, o webhook do Telegram.
    Valores em texto ("R$ 1.234,56") seguem o formato brasileiro.
    """
    flask_app = Flask(__name__)

    @flask_app.route("/api/dashboard", methods=['GET'])
    def dashboard():
        try:
            month = parse_month(request.args.get("month"))
        except InvalidMonthError as e:
            return _error(str(e), 400)

        analytics = DashboardAnalytics(
            transactions=repository.get_transactions(),
            expenses=repository.get_expenses(),
            assets=repository.get_assets(),
            categories=repository.get_categories(),
            month=month,
        )
        return jsonify(analytics.to_dict()), 200

    @flask_app.route("/api/transactions", methods=['POST'])
    def create_transaction():
        payload = request.get_json(silent=True) or {}
        tx_type = normalize_transaction_type(payload.get('type'))
        amount = parse_currency(payload.get('amount'))
        if tx_type is None or not amount:
            return _error("Informe 'type' (income, expense ou investment) e um 'amount' diferente de zero.", 400)
        date = _payload_date(payload)
        if date is None:
            return _error("Data inválida. Use o formato YYYY-MM-DD.", 400)

        # Despesas e investimentos são gravados com sinal negativo
        amount = abs(amount) if tx_type == TransactionType.INCOME else -abs(amount)
        ok = repository.add_transaction(
            amount, tx_type.value, date, payload.get('description') or '', payload.get('category'),
        )
        return _saved(ok)

    @flask_app.route("/api/targets", methods=['GET'])
    def targets():
        return jsonify(summarize_targets(repository.get_targets())), 200

    @flask_app.route("/api/targets", methods=['POST'])
    def create_target():
        payload = request.get_json(silent=True) or {}
        title = (payload.get('title') or '').strip()
        goal = parse_currency(payload.get('goal'))
        if not title or goal <= 0:
            return _error("Informe 'title' e um 'goal' maior que zero.", 400)
        ok = repository.add_target(
            title, goal, payload.get('date'),
            progress=parse_currency(payload.get('progress')),
            monthly_amount=parse_currency(payload.get('monthlyAmount')),
        )
        return _saved(ok)

    @flask_app.route("/api/targets/<target_id>/progress", methods=['POST'])
    def update_target_progress(target_id):
        payload = request.get_json(silent=True) or {}
        progress = parse_currency(payload.get('progress'))
        if progress < 0:
            return _error("O progresso não pode ser negativo.", 400)

        target = next((t for t in repository.get_targets() if t.get('id') == target_id), None)
        if target is None:
            return _error(f"Meta não encontrada: {target_id}", 404)

        if not repository.update_target_progress(target_id, progress, target['goal']):
            return _saved(False)
        status = target_status({'progress': progress, 'goal': target['goal']})
        return jsonify({"status": "ok", "targetStatus": status}), 200

    @flask_app.route("/api/assets", methods=['GET'])
    def assets():
        return jsonify(summarize_assets_by_type(repository.get_assets())), 200

    @flask_app.route("/api/assets", methods=['POST'])
    def create_asset():
        payload = request.get_json(silent=True) or {}
        name = (payload.get('name') or '').strip()
        value = parse_currency(payload.get('value'))
        if not name or not payload.get('asset_type_id') or value <= 0:
            return _error("Informe 'name', 'asset_type_id' e um 'value' maior que zero.", 400)
        date = _payload_date(payload)
        if date is None:
            return _error("Data inválida. Use o formato YYYY-MM-DD.", 400)
        ok = repository.add_asset(
            name, payload['asset_type_id'], value, date, yield_rate=parse_currency(payload.get('yield')),
        )
        return _saved(ok)

    @flask_app.route("/api/<entity>/<record_id>", methods=['DELETE'])
    def delete_record(entity, record_id):
        if entity not in DELETABLE_ENTITIES:
            return _error(f"Não é possível excluir registros de '{entity}'.", 404)
        try:
            ok = repository.delete_record(entity, record_id)
        except RecordNotFoundError:
            return _error(f"Registro não encontrado: {record_id}", 404)
        return _saved(ok, 200)

    if ptb_application is not None:
        @flask_app.route(WEBHOOK_PATH, methods=['POST'])
        async def telegram_webhook():
            if not request.is_json:
                logger.error("Webhook recebeu requisição sem JSON.")
                return _error("Request must be JSON", 400)

            update_json = request.get_json()
            try:
                update = Update.de_json(update_json, ptb_application.bot)
                await ptb_application.process_update(update)
                return jsonify({"status": "ok"}), 200
            except Exception:
                logger.exception("Falha ao processar atualização do Telegram")
                return _error("Failed to process update", 500)

    return flask_app
