"""
Sample benchmark: run the Hello World program repeatedly under both policies.
"""
import os
import time

from backend.brain.interpreter import Interpreter

HELLO = "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."


def run(n: int = 200, classic: bool = False) -> int:
    it = Interpreter()
    steps = 0
    for _ in range(n):
        res = it.run(HELLO, classic=classic)
        steps += res["steps"]
    return steps


if __name__ == "__main__":
    N = int(os.environ.get("BRAIN_BENCH_N", "200"))
    for classic in (False, True):
        start = time.time()
        steps = run(N, classic)
        elapsed = time.time() - start
        mode = "classic" if classic else "strict"
        print(f"{mode}: {N} runs, {steps} steps, {elapsed:.3f}s")
