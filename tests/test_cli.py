import json

import pytest
from typer.testing import CliRunner

from director_stub import (
    ETCD_VM,
    HM9000_VM,
    ExpectedRequest,
    redirect_to_task,
    task_output,
    task_snapshot,
)

from boshops.cli.cli import app
from boshops.cli.commands import deployments, stemcells, tasks
from boshops.cli.common import context, output

runner = CliRunner()


@pytest.fixture
def use_stub(monkeypatch):
    """Point every CLI command at the given stub director."""
    monkeypatch.setenv("BOSH_ENVIRONMENT", "https://director.example:25555")
    monkeypatch.setattr(output.console, "width", 200)

    def _use(stub):
        monkeypatch.setattr(context, "get_adapter", lambda config: stub.adapter())
        return stub

    return _use


def test_stemcells_list(use_stub, director_stub):
    stub = use_stub(
        director_stub(
            ExpectedRequest(
                "GET",
                "/stemcells",
                body='[{"name": "bosh-stemcell", "version": "993", "cid": "sc-1", "deployments": []}]',
            )
        )
    )

    result = runner.invoke(app, ["stemcells", "list"])

    assert result.exit_code == 0, result.output
    assert "bosh-stemcell" in result.output
    assert stub.all_requests_called()


def test_deployments_vms(use_stub, director_stub):
    stub = use_stub(
        director_stub(
            redirect_to_task("GET", "/deployments/cf-warden/vms?format=full", task_id=12),
            task_snapshot(12, "queued"),
            task_snapshot(12, "done"),
            task_output(12, f"{HM9000_VM}\n{ETCD_VM}\n"),
        )
    )

    result = runner.invoke(
        app, ["deployments", "vms", "cf-warden", "--poll-interval", "0.1"]
    )

    assert result.exit_code == 0, result.output
    assert result.output.index("hm9000_z1/0") < result.output.index("etcd_leader_z1/0")
    assert stub.all_requests_called()


def test_deployments_vms_prompts_for_deployment(use_stub, director_stub, monkeypatch):
    stub = use_stub(
        director_stub(
            ExpectedRequest("GET", "/deployments", body='[{"name": "cf-warden"}]'),
            redirect_to_task("GET", "/deployments/cf-warden/vms?format=full", task_id=3),
            task_snapshot(3, "done"),
            task_output(3, ""),
        )
    )
    monkeypatch.setattr(
        output.Out, "select_one", lambda self, message, choices: choices[0].value
    )

    result = runner.invoke(app, ["deployments", "vms", "--poll-interval", "0.1"])

    assert result.exit_code == 0, result.output
    assert "has no VMs" in result.output
    assert stub.all_requests_called()


def test_deployments_vms_task_failure_exits_non_zero(use_stub, director_stub):
    use_stub(
        director_stub(
            redirect_to_task("GET", "/deployments/cf-warden/vms?format=full", task_id=12),
            task_snapshot(12, "error"),
        )
    )

    result = runner.invoke(
        app, ["deployments", "vms", "cf-warden", "--poll-interval", "0.1"]
    )

    assert result.exit_code == 1
    assert "VM status task failed" in result.output


def test_tasks_show(use_stub, director_stub):
    use_stub(director_stub(task_snapshot(12, "done")))

    result = runner.invoke(app, ["tasks", "show", "12"])

    assert result.exit_code == 0, result.output
    assert "retrieve vm-stats" in result.output
    assert "admin" in result.output


def test_tasks_show_reports_http_status(use_stub, director_stub):
    use_stub(
        director_stub(
            ExpectedRequest("GET", "/tasks/99", status=404, body="Task 99 not found")
        )
    )

    result = runner.invoke(app, ["tasks", "show", "99"])

    assert result.exit_code == 1
    assert "HTTP 404: Task 99 not found" in result.output


def test_missing_environment_exits(monkeypatch):
    monkeypatch.delenv("BOSH_ENVIRONMENT", raising=False)

    result = runner.invoke(app, ["stemcells", "list"])

    assert result.exit_code == 1


def test_tasks_show_keeps_brackets_in_director_text(use_stub, director_stub):
    use_stub(
        director_stub(
            ExpectedRequest(
                "GET",
                "/tasks/5",
                body=json.dumps(
                    {
                        "id": 5,
                        "state": "done",
                        "description": "create deployment [red]cf[/red]",
                        "timestamp": 1390174354,
                        "result": None,
                        "user": "admin",
                    }
                ),
            )
        )
    )

    result = runner.invoke(app, ["tasks", "show", "5"])

    assert result.exit_code == 0, result.output
    assert "create deployment [red]cf[/red]" in result.output


def test_deployments_list_keeps_brackets_in_names(use_stub, director_stub):
    use_stub(
        director_stub(
            ExpectedRequest("GET", "/deployments", body='[{"name": "cf-[blue]"}]')
        )
    )

    result = runner.invoke(app, ["deployments", "list"])

    assert result.exit_code == 0, result.output
    assert "cf-[blue]" in result.output


def _interrupt(*args, **kwargs):
    raise KeyboardInterrupt


@pytest.mark.parametrize(
    ("module", "name", "argv"),
    [
        (stemcells, "get_stemcells", ["stemcells", "list"]),
        (deployments, "get_deployments", ["deployments", "list"]),
        (tasks, "get_task", ["tasks", "show", "1"]),
    ],
)
def test_ctrl_c_exits_130(
    use_stub, director_stub, monkeypatch, module, name, argv
):
    use_stub(director_stub())
    monkeypatch.setattr(module, name, _interrupt)

    result = runner.invoke(app, argv)

    assert result.exit_code == 130
    assert "Interrupted" in result.output
