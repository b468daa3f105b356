"""Tests for fetch cycle sequencing."""

import threading

from railway_defects.client.sequencing import FetchSequencer


def test_in_order_responses_are_accepted():
    sequencer = FetchSequencer()

    first = sequencer.issue()
    assert sequencer.accept(first)
    second = sequencer.issue()
    assert sequencer.accept(second)


def test_older_response_is_discarded_after_newer_one():
    sequencer = FetchSequencer()
    older = sequencer.issue()
    newer = sequencer.issue()

    assert sequencer.accept(newer)
    assert not sequencer.accept(older)


def test_ticket_is_accepted_once():
    sequencer = FetchSequencer()
    ticket = sequencer.issue()

    assert sequencer.accept(ticket)
    assert not sequencer.accept(ticket)


def test_in_flight():
    sequencer = FetchSequencer()
    assert not sequencer.in_flight

    sequencer.issue()
    latest = sequencer.issue()
    assert sequencer.in_flight

    sequencer.accept(latest)
    assert not sequencer.in_flight


def test_tickets_are_unique_across_threads():
    sequencer = FetchSequencer()
    tickets = []
    lock = threading.Lock()

    def worker():
        for _ in range(100):
            ticket = sequencer.issue()
            with lock:
                tickets.append(ticket)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(tickets) == list(range(1, 801))
