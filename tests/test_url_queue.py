# File: tests/test_url_queue.py
import threading
from concurrent.futures import ThreadPoolExecutor

from script_scout.crawler.url_queue import URLQueue


def test_fifo_order_and_empty_pop():
    queue = URLQueue()
    queue.push("a")
    queue.push("b")

    assert queue.pop() == "a"
    assert queue.pop() == "b"
    assert queue.pop() is None


def test_empty_string_url_is_not_the_empty_marker():
    queue = URLQueue()
    queue.push("")

    assert queue.pop() == ""
    assert queue.pop() is None


def test_duplicates_are_kept():
    queue = URLQueue(["x", "x"])
    queue.push("x")

    assert len(queue) == 3
    assert [queue.pop() for _ in range(3)] == ["x", "x", "x"]


def test_concurrent_pushes_are_not_lost():
    queue = URLQueue()
    workers = 64
    barrier = threading.Barrier(workers)

    def push(i: int) -> None:
        barrier.wait()
        queue.push(f"https://example.com/{i}.js")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        list(pool.map(push, range(workers)))

    assert len(queue) == workers


def test_concurrent_push_and_pop_deliver_every_url_once():
    queue = URLQueue()
    total = 2000
    popped: list[str] = []
    lock = threading.Lock()
    done = threading.Event()

    def producer(offset: int) -> None:
        for i in range(offset, total, 4):
            queue.push(str(i))

    def consumer() -> None:
        while not done.is_set() or len(queue):
            url = queue.pop()
            if url is not None:
                with lock:
                    popped.append(url)

    consumers = [threading.Thread(target=consumer) for _ in range(3)]
    for t in consumers:
        t.start()
    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(producer, range(4)))
    done.set()
    for t in consumers:
        t.join()

    assert sorted(popped, key=int) == [str(i) for i in range(total)]
