from concurrent.futures import ThreadPoolExecutor

from leisure_pricing.services.pricing_service.quote_sequencer import QuoteSequencer


def test_latest_request_wins_even_if_it_finishes_first():
    sequencer = QuoteSequencer()
    first = sequencer.begin("form-1")
    second = sequencer.begin("form-1")

    assert sequencer.complete("form-1", second, "price for 4")
    assert not sequencer.complete("form-1", first, "price for 3")
    assert sequencer.latest("form-1") == (second, "price for 4")


def test_in_order_completions_are_all_published():
    sequencer = QuoteSequencer()

    seq = sequencer.begin("form-1")
    assert sequencer.complete("form-1", seq, "a")
    seq = sequencer.begin("form-1")
    assert sequencer.complete("form-1", seq, "b")
    assert sequencer.latest("form-1") == (2, "b")


def test_keys_are_independent():
    sequencer = QuoteSequencer()
    a = sequencer.begin("form-a")
    sequencer.begin("form-b")

    assert sequencer.is_current("form-a", a)
    assert sequencer.complete("form-a", a, 10)
    assert sequencer.latest("form-b") is None


def test_forget_drops_state():
    sequencer = QuoteSequencer()
    seq = sequencer.begin("form-1")
    sequencer.complete("form-1", seq, "x")

    sequencer.forget("form-1")

    assert sequencer.latest("form-1") is None
    assert sequencer.begin("form-1") == 1


def test_sequence_numbers_are_unique_across_threads():
    sequencer = QuoteSequencer()

    with ThreadPoolExecutor(max_workers=8) as pool:
        seqs = list(pool.map(lambda _: sequencer.begin("busy"), range(200)))

    assert sorted(seqs) == list(range(1, 201))


def test_oldest_keys_are_evicted_past_the_cap():
    sequencer = QuoteSequencer(max_keys=2)
    for key in ("form-1", "form-2"):
        sequencer.complete(key, sequencer.begin(key), key)

    sequencer.begin("form-1")
    sequencer.begin("form-3")

    assert len(sequencer) == 2
    assert sequencer.latest("form-2") is None
    assert sequencer.latest("form-1") == (1, "form-1")
    assert sequencer.begin("form-2") == 1


def test_late_completion_of_evicted_key_is_not_published():
    sequencer = QuoteSequencer(max_keys=1)
    seq = sequencer.begin("form-1")
    sequencer.begin("form-2")

    assert not sequencer.complete("form-1", seq, "stale")
    assert sequencer.latest("form-1") is None
