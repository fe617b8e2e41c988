# Python
import sys

N = 40

def fibonacci(n):
    """Naive recursive Fibonacci, kept exponential on purpose (CPU benchmark)"""
    if n < 0:
        raise ValueError(f"Fibonacci index must be non-negative, got {n}")
    return fibonacci(n-1) + fibonacci(n-2) if n > 1 else n

def main():
    result = fibonacci(N)
    print(f"Fibonacci({N}) = {result}")
    return 0

if __name__ == '__main__':
    sys.exit(main())
