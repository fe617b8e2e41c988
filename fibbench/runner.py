import json
import os
import platform
import sys
import time
from datetime import datetime

from fibbench.errors import BenchmarkError
from fibbench.fib import fibonacci

# Configuration
CONFIG = {
    'N': 40,
    'WARMUP': {'iterations': 1, 'n': 25},
    'COOLDOWN_TIME': 2000,
    'TEST_RUNS': 5,
    'RESULTS_DIR': 'results'
}

def read_cpu_model(path='/proc/cpuinfo'):
    try:
        with open(path) as f:
            for line in f:
                key, _, value = line.partition(':')
                if key.strip() in ('model name', 'Model'):
                    return value.strip() or 'Unknown'
    except OSError:
        pass
    return 'Unknown'

def get_system_specs():
    try:
        return {
            'python': {
                'implementation': platform.python_implementation(),
                'version': platform.python_version()
            },
            'cpu': {
                'model': read_cpu_model(),
                'cores': os.cpu_count() or 'Unknown',
                'machine': platform.machine() or 'Unknown'
            },
            'os': platform.platform() or 'Unknown'
        }
    except Exception as err:
        print('Error getting system specs:', err)
        return {
            'python': {'implementation': 'Error', 'version': 'Error'},
            'cpu': {'model': 'Error', 'cores': 'Error', 'machine': 'Error'},
            'os': 'Error'
        }

def timed_fibonacci(n):
    start = time.perf_counter()
    result = fibonacci(n)
    return result, time.perf_counter() - start

def warm_up(n=None, iterations=None):
    n = CONFIG['WARMUP']['n'] if n is None else n
    iterations = CONFIG['WARMUP']['iterations'] if iterations is None else iterations
    print(f"Starting warm-up for {iterations} iterations of fibonacci({n}).")
    warm_up_start = time.perf_counter()

    for i in range(iterations):
        _, elapsed = timed_fibonacci(n)
        print(f"Warm-up iteration {i + 1} completed in {elapsed * 1000:.2f} ms")

    print(f"Warm-up completed in {(time.perf_counter() - warm_up_start) * 1000:.2f} ms.")

def run_benchmark(n=None, runs=None, cooldown=None, warmup_iterations=None):
    """Time `runs` sequential computations of fibonacci(n).

    `cooldown` is the pause between runs in seconds; it defaults to
    CONFIG['COOLDOWN_TIME'] (milliseconds).
    """
    n = CONFIG['N'] if n is None else n
    runs = CONFIG['TEST_RUNS'] if runs is None else runs
    cooldown = CONFIG['COOLDOWN_TIME'] / 1000 if cooldown is None else cooldown

    results = {
        'system': get_system_specs(),
        'n': n,
        'tests': []
    }

    warm_up(n=min(n, CONFIG['WARMUP']['n']), iterations=warmup_iterations)

    for test_run in range(1, runs + 1):
        print(f"Running test iteration {test_run}...")

        if test_run > 1 and cooldown > 0:
            print(f"Cooldown time: {cooldown} seconds...")
            time.sleep(cooldown)

        value, elapsed = timed_fibonacci(n)
        print(f"Time: {elapsed:.3f}s")

        if results['tests'] and results['tests'][0]['result'] != value:
            raise BenchmarkError(
                f"Run {test_run} computed fibonacci({n}) = {value}, "
                f"expected {results['tests'][0]['result']}"
            )

        results['tests'].append({
            'run': test_run,
            'n': n,
            'result': value,
            'durationSec': elapsed,
            'timestamp': datetime.now().isoformat()
        })

    return results

def save_results(results, path):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(results, f, indent=2)
    print(f"Results saved to {path}")
    return path

def main():
    try:
        results = run_benchmark()
        save_results(results, os.path.join(CONFIG['RESULTS_DIR'], f"fib-{results['n']}.json"))
    except Exception as err:
        print("Error running benchmark:", err)
        raise
    finally:
        print("All tests completed!")
    return 0

if __name__ == '__main__':
    sys.exit(main())
