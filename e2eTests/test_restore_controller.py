import asyncio
from dataclasses import asdict

import pytest

from cihub.core.session_controller import SessionController
from cihub.infra.memory_store import InMemoryKeyValueStore
from fakes import FakeEstimatorApi, success_body


def run_five(session: SessionController):
    for i in range(5):
        asyncio.run(session.submit({"concurrency": str(10 * (i + 1)), "region": f"region-{i}"}))


def test_restore_replays_entry_exactly(ticking_clock):
    api = FakeEstimatorApi([success_body(score=60 + i, cost=0.001 * i) for i in range(5)])
    session = SessionController(api, InMemoryKeyValueStore())
    run_five(session)
    target = session.history()[3]

    form, result = session.restore(3)

    assert asdict(session.form) == asdict(target.input)
    assert session.result == target.data
    assert (form, result) == (target.input, target.data)
    assert session.form.concurrency == 20
    assert session.form.region == "region-1"


def test_restore_is_offline_and_leaves_history_alone(ticking_clock):
    api = FakeEstimatorApi([success_body(score=70 + i) for i in range(5)])
    session = SessionController(api, InMemoryKeyValueStore())
    run_five(session)
    before = session.history()

    session.restore(0)
    session.restore(4)

    assert len(api.payloads) == 5
    assert session.history() == before


def test_restore_outranks_older_in_flight_result(ticking_clock):
    api = FakeEstimatorApi([success_body(score=1), success_body(score=2)], delays=[0.0, 0.3])
    session = SessionController(api, InMemoryKeyValueStore())
    asyncio.run(session.submit({}))

    async def restore_while_pending():
        pending = asyncio.create_task(session.submit({}))
        await asyncio.sleep(0.05)
        session.restore(0)
        return await pending

    late = asyncio.run(restore_while_pending())

    assert late.response.risk_score == 2
    assert session.result.risk_score == 1
    assert len(session.history()) == 2


def test_history_survives_a_new_session(ticking_clock):
    store = InMemoryKeyValueStore()
    first = SessionController(FakeEstimatorApi([success_body(score=88)]), store)
    asyncio.run(first.submit({"region": "europe-west4"}))

    second = SessionController(FakeEstimatorApi([]), store)

    assert second.history() == first.history()
    form, result = second.restore(0)
    assert form.region == "europe-west4"
    assert result.risk_score == 88


def test_corrupt_store_starts_empty_session():
    session = SessionController(FakeEstimatorApi([]), InMemoryKeyValueStore({"cihub_history_v1": "{not json"}))
    assert session.history() == ()
    assert session.result is None
    assert session.loading is False


def test_restored_result_cannot_alter_history(ticking_clock):
    body = {**success_body(score=75), "assumptions": {"region": "asia-south1", "active_instances": 2}}
    session = SessionController(FakeEstimatorApi([body]), InMemoryKeyValueStore())
    asyncio.run(session.submit({}))

    _, result = session.restore(0)

    with pytest.raises(TypeError):
        result.assumptions["active_instances"] = 99
    assert session.history()[0].data.assumptions["active_instances"] == 2
    assert result.to_dict()["assumptions"] == {"region": "asia-south1", "active_instances": 2}
