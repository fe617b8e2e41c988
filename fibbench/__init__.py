from fibbench.fib import fibonacci

__all__ = ['fibonacci']
