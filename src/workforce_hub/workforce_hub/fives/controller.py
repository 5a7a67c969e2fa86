from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, api_errors, current_role, login_required, optional_int_arg, payload, send_xlsx, to_json
from ..common.datetime_utils import normalize_month
from ..container import Container
from ..reports.excel import ranking_workbook
from .scoring import rank_label


def register(app: Flask, container: Container) -> None:
    svc = container.fives_service

    @app.route("/api/fives/inspections", methods=["POST"], endpoint="fives_submit")
    @login_required
    @api_errors("saving 5S inspection")
    def fives_submit():
        inspection_id = svc.submit(payload())
        record = svc.get(inspection_id)
        return (
            jsonify(
                {
                    "success": True,
                    "inspection_id": inspection_id,
                    "total_score": record.total_score,
                    "grade": rank_label(record.total_score).value,
                }
            ),
            201,
        )

    @app.route("/api/fives/inspections/<int:inspection_id>", methods=["PUT"], endpoint="fives_update")
    @admin_required
    @api_errors("updating 5S inspection")
    def fives_update(inspection_id: int):
        svc.update(current_role=current_role(), inspection_id=inspection_id, payload=payload())
        return jsonify({"success": True})

    @app.route("/api/fives/inspections/<int:inspection_id>", methods=["DELETE"], endpoint="fives_delete")
    @admin_required
    @api_errors("deleting 5S inspection")
    def fives_delete(inspection_id: int):
        svc.delete(current_role=current_role(), inspection_id=inspection_id)
        return jsonify({"success": True})

    @app.route("/api/fives/results", methods=["GET"], endpoint="fives_results")
    @admin_required
    @api_errors("loading 5S results")
    def fives_results():
        results = svc.results(
            month=request.args.get("month"),
            search=request.args.get("q", ""),
            department_id=optional_int_arg("department_id"),
        )
        return jsonify({"success": True, "results": to_json(results)})

    @app.route("/api/fives/ranking.xlsx", methods=["GET"], endpoint="fives_ranking_xlsx")
    @admin_required
    @api_errors("exporting 5S ranking")
    def fives_ranking_xlsx():
        month = normalize_month(request.args.get("month"))
        name = f"5s_ranking_{month}.xlsx" if month else "5s_ranking.xlsx"
        return send_xlsx(ranking_workbook(svc.ranking(month), month), name)
