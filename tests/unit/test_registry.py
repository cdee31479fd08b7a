"""Workflow registry and registry-file tests."""

import textwrap

import pytest
from pydantic import ValidationError

from stageflow.contracts import always_valid, identity_acceptor
from stageflow.errors import UnknownWorkflowError, WorkflowConfigurationError
from stageflow.registry import WorkflowRegistry, import_object, load_registry


def reject(output):
    return False, "nope"


def test_register_fills_missing_validators():
    registry = WorkflowRegistry()

    workflow = registry.register("Demo", "Intro;Form(name)", identity_acceptor)

    assert workflow.stages == ("Intro", "Form")
    assert workflow.arguments == (None, ("name",))
    assert workflow.validators == (always_valid, always_valid)
    assert workflow.redirector is None
    assert registry.get("Demo") is workflow


def test_register_backfills_none_entries():
    registry = WorkflowRegistry()

    workflow = registry.register("Demo", "A;B", validators=[None, reject])

    assert workflow.validators == (always_valid, reject)
    assert workflow.acceptor is identity_acceptor


def test_stage_and_validator_counts_match():
    registry = WorkflowRegistry()
    for definition in ("A", "A;B", "A(x);B;C(:y, !z)"):
        workflow = registry.register("W", definition)
        assert len(workflow.stages) == len(workflow.arguments) == len(workflow.validators)


def test_register_rejects_validator_count_mismatch():
    registry = WorkflowRegistry()

    with pytest.raises(WorkflowConfigurationError):
        registry.register("Demo", "A;B", validators=[reject])

    assert "Demo" not in registry


def test_register_rejects_empty_definition():
    registry = WorkflowRegistry()

    with pytest.raises(WorkflowConfigurationError):
        registry.register("Demo", " ; ")


def test_register_rejects_empty_name():
    registry = WorkflowRegistry()

    with pytest.raises(WorkflowConfigurationError):
        registry.register("", "A")

    assert len(registry) == 0


def test_register_replaces_existing(caplog):
    registry = WorkflowRegistry()
    registry.register("Demo", "A")

    with caplog.at_level("WARNING"):
        registry.register("Demo", "B;C")

    assert registry.get("Demo").stages == ("B", "C")
    assert "Replacing existing workflow 'Demo'" in caplog.text


def test_get_unknown_workflow():
    with pytest.raises(UnknownWorkflowError):
        WorkflowRegistry().get("missing")


def test_definition_is_frozen():
    workflow = WorkflowRegistry().register("Demo", "A")
    with pytest.raises(ValidationError):
        workflow.name = "Other"


def test_stage_name_at_completion_index():
    workflow = WorkflowRegistry().register("Demo", "A;B")
    assert workflow.stage_name(1) == "B"
    assert workflow.stage_name(2) is None


def test_import_object():
    assert import_object("stageflow.contracts:always_valid") is always_valid
    assert import_object("stageflow.contracts.identity_acceptor") is identity_acceptor

    with pytest.raises(WorkflowConfigurationError):
        import_object("stageflow.contracts:missing")
    with pytest.raises(WorkflowConfigurationError):
        import_object("stageflow.constants:CANCEL_WORKFLOW_NAME")


def test_load_registry_from_yaml(tmp_path, monkeypatch):
    hooks = tmp_path / "registry_hooks.py"
    hooks.write_text(
        textwrap.dedent(
            """
            def check_name(output):
                return bool(output.get("name")), "name is required"

            def accept(values):
                return {"done": True}
            """
        )
    )
    monkeypatch.syspath_prepend(str(tmp_path))

    path = tmp_path / "workflows.yaml"
    path.write_text(
        textwrap.dedent(
            """
            workflows:
              - name: Signup
                definition: "Intro;Form(name, :Sign up)"
                acceptor: registry_hooks:accept
                validators: [null, "registry_hooks:check_name"]
              - name: Plain
                definition: Only
            """
        )
    )

    registry = load_registry(path)

    assert registry.names() == ["Signup", "Plain"]
    signup = registry.get("Signup")
    assert signup.arguments == (None, ("name", ":Sign up"))
    assert signup.validators[0] is always_valid
    assert signup.validators[1]({"name": ""}) == (False, "name is required")
    assert signup.acceptor({}) == {"done": True}
    assert registry.get("Plain").acceptor is identity_acceptor


def test_load_registry_rejects_bad_workflow(tmp_path):
    path = tmp_path / "workflows.yaml"
    path.write_text("workflows:\n  - name: Broken\n    definition: ';'\n")

    with pytest.raises(WorkflowConfigurationError):
        load_registry(path)
