"""
Unit tests for the Financeiro and Relatorios API controllers.

The database session and repository are patched out; the controllers are
exercised through the Flask test client against an in-memory store.
"""

from unittest.mock import Mock, patch

import pytest

from barbershop.domain.entities import Unit
from factories.report_factories import (
    InMemoryReportStore,
    at,
    make_barber,
    make_client,
    make_transaction,
)

FINANCEIRO = "barbershop.controllers.financeiro_controller"
RELATORIOS = "barbershop.controllers.relatorios_controller"


@pytest.fixture
def store():
    return InMemoryReportStore(
        units=[Unit(id=1, name="Centro")],
        barbers=[make_barber(id=1, name="João", unit_id=1, commission_rate="40")],
        transactions=[
            make_transaction("100.00", occurred_at=at(2025, 8, 20, 9)),
            make_transaction("35.00", occurred_at=at(2025, 8, 4, 17)),
        ],
        clients=[make_client(unit_id=1, last_visit_at=at(2025, 8, 19), total_visits=2)],
    )


@pytest.fixture
def mock_session():
    return Mock()


@pytest.fixture
def patched_financeiro(store, mock_session, now):
    with patch(f"{FINANCEIRO}.SessionLocal", return_value=mock_session), patch(
        f"{FINANCEIRO}.ReportRepository", return_value=store
    ), patch(f"{FINANCEIRO}._now", return_value=now):
        yield


@pytest.fixture
def patched_relatorios(store, mock_session, now):
    with patch(f"{RELATORIOS}.SessionLocal", return_value=mock_session), patch(
        f"{RELATORIOS}.ReportRepository", return_value=store
    ), patch(f"{RELATORIOS}._now", return_value=now):
        yield


@pytest.mark.controllers
@pytest.mark.reports
class TestFluxoCaixaEndpoint:
    def test_success(self, client, patched_financeiro, mock_session):
        response = client.get("/financeiro/api/fluxo-caixa?unidade_id=1")

        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is True
        periods = body["data"]["periods"]
        assert periods["today"]["summary"]["total_revenue"] == 100.0
        assert periods["month"]["summary"]["total_revenue"] == 135.0
        assert periods["month"]["summary"]["total_commission"] == 54.0
        assert body["data"]["selected_period"] == "month"
        assert len(body["data"]["transactions"]) == 2
        mock_session.close.assert_called_once()

    def test_selected_period(self, client, patched_financeiro):
        response = client.get("/financeiro/api/fluxo-caixa?unidade_id=1&periodo=today")

        body = response.get_json()
        assert body["data"]["selected_period"] == "today"
        assert [row["total_price"] for row in body["data"]["transactions"]] == [100.0]

    def test_missing_unit_is_bad_request(self, client, patched_financeiro, mock_session):
        response = client.get("/financeiro/api/fluxo-caixa")

        assert response.status_code == 400
        assert response.get_json()["success"] is False
        # Session is never opened for an invalid request
        mock_session.close.assert_not_called()

    def test_unknown_period_is_bad_request(self, client, patched_financeiro, mock_session):
        response = client.get("/financeiro/api/fluxo-caixa?unidade_id=1&periodo=ano")

        assert response.status_code == 400
        assert "ano" in response.get_json()["message"]
        mock_session.close.assert_called_once()

    def test_unexpected_error_is_server_error(self, client, mock_session, now):
        broken = Mock()
        broken.fetch_barbers.side_effect = RuntimeError("db down")

        with patch(f"{FINANCEIRO}.SessionLocal", return_value=mock_session), patch(
            f"{FINANCEIRO}.ReportRepository", return_value=broken
        ), patch(f"{FINANCEIRO}._now", return_value=now):
            response = client.get("/financeiro/api/fluxo-caixa?unidade_id=1")

        assert response.status_code == 500
        assert response.get_json() == {
            "success": False,
            "message": "Erro ao gerar fluxo de caixa",
        }
        mock_session.close.assert_called_once()


@pytest.mark.controllers
@pytest.mark.reports
class TestComissoesEndpoint:
    def test_month_is_one_based_in_the_query(self, client, patched_financeiro):
        response = client.get("/financeiro/api/comissoes?unidade_id=1&ano=2025&mes=8")

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["month_index"] == 7
        assert data["range"]["start"] == "2025-08-01T00:00:00+00:00"
        assert data["summary"]["count"] == 2
        assert data["summary"]["total_commission"] == 54.0
        assert data["summary"]["total_profit"] == 81.0

    def test_defaults_to_current_month(self, client, patched_financeiro):
        response = client.get("/financeiro/api/comissoes?unidade_id=1")

        data = response.get_json()["data"]
        assert data["year"] == 2025
        assert data["month_index"] == 7

    def test_single_barber(self, client, patched_financeiro):
        response = client.get("/financeiro/api/comissoes?unidade_id=1&barbeiro_id=1")

        data = response.get_json()["data"]
        assert data["barber"]["name"] == "João"
        assert data["rate"] == 40.0

    def test_unknown_barber_is_bad_request(self, client, patched_financeiro):
        response = client.get("/financeiro/api/comissoes?unidade_id=1&barbeiro_id=9")

        assert response.status_code == 400

    @pytest.mark.parametrize("mes", ["0", "13", "agosto"])
    def test_invalid_month_is_bad_request(self, client, patched_financeiro, mes):
        response = client.get(f"/financeiro/api/comissoes?unidade_id=1&mes={mes}")

        assert response.status_code == 400
        assert response.get_json()["success"] is False

    @pytest.mark.parametrize("mes", ["0", "13"])
    def test_month_outside_one_to_twelve_uses_one_based_message(
        self, client, patched_financeiro, mock_session, mes
    ):
        response = client.get(f"/financeiro/api/comissoes?unidade_id=1&mes={mes}")

        assert response.status_code == 400
        assert response.get_json()["message"] == "Parâmetro 'mes' deve estar entre 1 e 12"
        mock_session.close.assert_not_called()


@pytest.mark.controllers
@pytest.mark.reports
class TestUnidadesEndpoint:
    def test_all_units(self, client, patched_relatorios):
        response = client.get("/relatorios/api/unidades")

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["units"][0]["unit_name"] == "Centro"
        assert data["units"][0]["active"] == 1
        assert data["totals"]["total_visits"] == 2

    def test_selected_unit_ids(self, client, patched_relatorios):
        response = client.get("/relatorios/api/unidades?unidade_id=1&unidade_id=2")

        assert response.status_code == 200
        assert [u["unit_id"] for u in response.get_json()["data"]["units"]] == [1]

    def test_malformed_unit_id(self, client, patched_relatorios):
        response = client.get("/relatorios/api/unidades?unidade_id=abc")

        assert response.status_code == 400


@pytest.mark.controllers
def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "ok"}


@pytest.mark.controllers
def test_unknown_route_uses_envelope(client):
    response = client.get("/financeiro/api/nao-existe")

    assert response.status_code == 404
    assert response.get_json()["success"] is False
