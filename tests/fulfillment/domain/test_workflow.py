from fulfillment.task.task import Task, TaskStatus
from fulfillment.task.workflow import (
    WORKFLOW_STEPS,
    all_steps_completed,
    get_current_step,
    get_next_step,
    get_step_by_type,
    get_workflow_progress,
)


def _task(task_type, status=TaskStatus.PENDING.value):
    task = Task.open(order_id="order-1", order_number="ORD-1", task_type=task_type, assigned_to="meera")
    task.status = status
    return task


class TestWorkflowSteps:
    def test_steps_run_packing_then_quality_check_then_shipping_prep(self):
        assert [step.type for step in WORKFLOW_STEPS] == ["packing", "quality_check", "shipping_prep"]
        assert [step.order for step in WORKFLOW_STEPS] == [1, 2, 3]

    def test_first_step_when_nothing_has_started(self):
        assert get_next_step(None).type == "packing"

    def test_next_step_follows_the_current_one(self):
        assert get_next_step("packing").type == "quality_check"
        assert get_next_step("quality_check").type == "shipping_prep"

    def test_no_step_after_the_last_or_unknown_types(self):
        assert get_next_step("shipping_prep") is None
        assert get_next_step("other") is None
        assert get_step_by_type("other") is None


class TestWorkflowProgress:
    def test_no_tasks_means_zero_progress_and_packing_is_current(self):
        assert get_workflow_progress([]) == 0
        assert get_current_step([]).type == "packing"

    def test_progress_counts_completed_steps_only(self):
        tasks = [_task("packing", "completed"), _task("quality_check", "in_progress")]

        assert get_workflow_progress(tasks) == 33
        assert get_current_step(tasks).type == "quality_check"

    def test_other_tasks_do_not_count(self):
        assert get_workflow_progress([_task("other", "completed")]) == 0

    def test_all_steps_completed(self):
        tasks = [_task(step.type, "completed") for step in WORKFLOW_STEPS]

        assert get_workflow_progress(tasks) == 100
        assert get_current_step(tasks) is None
        assert all_steps_completed(tasks)


class TestTask:
    def test_new_task_is_pending_with_medium_priority(self):
        task = _task("packing")

        assert task.status == "pending"
        assert task.priority == "medium"

    def test_completing_stamps_completed_at_once(self):
        task = _task("packing")

        assert task.change_status("in_progress") is False
        assert task.change_status("completed") is True
        first_completion = task.completed_at
        assert first_completion is not None
        assert task.change_status("completed") is False
        assert task.completed_at == first_completion
