import pytest

from contracts.d1_cataloging_dto import ImageAsset
from contracts.d2_catalog_dto import BatchStatus
from src.cataloging.application.batch_orchestrator import BatchOrchestrator


def assets(*names):
    return [ImageAsset(data=name.encode(), filename=name) for name in names]


def test_items_start_pending_with_price():
    """Тест: новый элемент в PENDING, цена из имени файла."""
    orchestrator = BatchOrchestrator(pipeline=None)

    items = orchestrator.add_assets(assets("380.1.jpg", "cover.jpg"))

    assert [item.status for item in items] == [BatchStatus.PENDING, BatchStatus.PENDING]
    assert [item.record.price for item in items] == ["380", ""]
    assert items[0].preview_asset is items[0].source_asset


def test_failure_is_isolated(failing_pipeline_factory):
    """Тест: ошибка элемента k не влияет на остальные."""
    pipeline = failing_pipeline_factory("200.jpg")
    orchestrator = BatchOrchestrator(pipeline)
    orchestrator.add_assets(assets("100.jpg", "200.jpg", "300.jpg"))

    summary = orchestrator.run()

    statuses = [item.status for item in orchestrator.items]
    assert statuses == [BatchStatus.DONE, BatchStatus.FAILED, BatchStatus.DONE]
    assert summary.processed == 3
    assert summary.done == 2
    assert summary.failed == 1

    failed = orchestrator.items[1]
    assert failed.error_note == "Failed"
    assert failed.record.title == ""
    assert failed.processed_asset is None


def test_items_processed_sequentially_in_order(fake_pipeline):
    orchestrator = BatchOrchestrator(fake_pipeline, auto_crop=False)
    orchestrator.add_assets(assets("1.jpg", "2.jpg", "3.jpg"))

    orchestrator.run()

    assert fake_pipeline.calls == ["1.jpg", "2.jpg", "3.jpg"]
    assert fake_pipeline.auto_crop_flags == [False, False, False]


def test_done_keeps_price_and_fills_record(fake_pipeline):
    """Тест: результат AI не перезаписывает цену."""
    orchestrator = BatchOrchestrator(fake_pipeline)
    item = orchestrator.add_assets(assets("380.jpg"))[0]
    orchestrator.update_field(item.id, "price", "420")

    orchestrator.run()

    assert item.status == BatchStatus.DONE
    assert item.record.price == "420"
    assert item.record.title == "Title 380"
    assert item.record.synopsis == "A synopsis."
    assert item.processed_asset.data == b"cropped-380.jpg"
    assert item.preview_asset is item.processed_asset


def test_processing_visible_before_pipeline_call(fake_pipeline):
    """Тест: наблюдатель видит PROCESSING до вызова пайплайна."""
    events = []
    orchestrator = BatchOrchestrator(
        fake_pipeline,
        on_update=lambda item: events.append((item.source_asset.filename, item.status)),
    )
    orchestrator.add_assets(assets("1.jpg", "2.jpg"))
    fake_pipeline.before_call = lambda image: events.append((image.filename, "pipeline"))

    orchestrator.run()

    assert events == [
        ("1.jpg", BatchStatus.PROCESSING),
        ("1.jpg", "pipeline"),
        ("1.jpg", BatchStatus.DONE),
        ("2.jpg", BatchStatus.PROCESSING),
        ("2.jpg", "pipeline"),
        ("2.jpg", BatchStatus.DONE),
    ]


def test_second_run_refused_while_running(fake_pipeline):
    """Тест: повторный запуск из наблюдателя отклоняется."""
    nested = []
    orchestrator = BatchOrchestrator(fake_pipeline)
    orchestrator.on_update = lambda item: nested.append(orchestrator.run())
    orchestrator.add_assets(assets("1.jpg", "2.jpg"))

    summary = orchestrator.run()

    assert summary.processed == 2
    assert nested and all(result is None for result in nested)
    assert fake_pipeline.calls == ["1.jpg", "2.jpg"]
    assert not orchestrator.is_running


def test_run_only_processes_pending(failing_pipeline_factory):
    pipeline = failing_pipeline_factory("bad.jpg")
    orchestrator = BatchOrchestrator(pipeline)
    orchestrator.add_assets(assets("1.jpg", "bad.jpg"))
    orchestrator.run()

    second = orchestrator.run()

    assert second.processed == 0
    assert pipeline.calls == ["1.jpg", "bad.jpg"]


def test_reset_failed_item(failing_pipeline_factory):
    """Тест: FAILED -> PENDING, повторный прогон только для него."""
    pipeline = failing_pipeline_factory("bad.jpg")
    orchestrator = BatchOrchestrator(pipeline)
    orchestrator.add_assets(assets("1.jpg", "bad.jpg"))
    orchestrator.run()
    failed = orchestrator.items[1]

    pipeline.fail_on.clear()
    orchestrator.reset(failed.id)
    assert failed.status == BatchStatus.PENDING
    assert failed.error_note is None

    orchestrator.run()

    assert failed.status == BatchStatus.DONE
    assert pipeline.calls == ["1.jpg", "bad.jpg", "bad.jpg"]


def test_reset_ignores_non_failed(fake_pipeline):
    orchestrator = BatchOrchestrator(fake_pipeline)
    item = orchestrator.add_assets(assets("1.jpg"))[0]
    orchestrator.run()

    orchestrator.reset(item.id)

    assert item.status == BatchStatus.DONE


def test_item_removed_by_observer_is_skipped(fake_pipeline):
    orchestrator = BatchOrchestrator(fake_pipeline)
    first, second = orchestrator.add_assets(assets("1.jpg", "2.jpg"))

    def remove_second(item):
        if item is first and item.status == BatchStatus.DONE:
            orchestrator.remove(second.id)

    orchestrator.on_update = remove_second
    summary = orchestrator.run()

    assert summary.processed == 1
    assert fake_pipeline.calls == ["1.jpg"]
    assert orchestrator.items == (first,)


def test_manual_maintenance(fake_pipeline):
    orchestrator = BatchOrchestrator(fake_pipeline)
    item = orchestrator.add_assets(assets("1.jpg"))[0]
    replacement = ImageAsset(data=b"new", filename="manual.jpg")

    orchestrator.update_field(item.id, "title", "Hand Written")
    orchestrator.replace_image(item.id, replacement)
    orchestrator.update_field("unknown-id", "title", "ignored")

    assert item.record.title == "Hand Written"
    assert item.processed_asset is replacement
    assert item.preview_asset is replacement
    with pytest.raises(ValueError):
        orchestrator.update_field(item.id, "isbn", "123")


def test_take_completed(failing_pipeline_factory):
    pipeline = failing_pipeline_factory("bad.jpg")
    orchestrator = BatchOrchestrator(pipeline)
    orchestrator.add_assets(assets("1.jpg", "bad.jpg", "3.jpg"))
    orchestrator.run()

    completed = orchestrator.take_completed()

    assert [item.source_asset.filename for item in completed] == ["1.jpg", "3.jpg"]
    assert [item.source_asset.filename for item in orchestrator.items] == ["bad.jpg"]


def test_observer_error_does_not_leave_item_processing(fake_pipeline):
    """Тест: ошибка наблюдателя на PROCESSING переводит элемент в FAILED."""
    def observer(item):
        if item.source_asset.filename == "1.jpg" and item.status == BatchStatus.PROCESSING:
            raise RuntimeError("observer crashed")

    orchestrator = BatchOrchestrator(fake_pipeline, on_update=observer)
    first, second = orchestrator.add_assets(assets("1.jpg", "2.jpg"))

    summary = orchestrator.run()

    assert first.status == BatchStatus.FAILED
    assert first.error_note == "Failed"
    assert second.status == BatchStatus.DONE
    assert fake_pipeline.calls == ["2.jpg"]
    assert summary.failed == 1
    assert not orchestrator.is_running
