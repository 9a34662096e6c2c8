def is_even(a):
    return a % 2 == 0


def is_odd(a):
    return a % 2 == 1


def halve(a):
    return a // 2


def identity(a):
    return a


def parity_bands_clauses():
    return [
        case(bind("a", rng(1, 10)), bind("a", rng(21, 30)), when=is_even, then=halve),
        case(bind("a", rng(11, 20)), bind("a", rng(31, 40)), when=is_odd, then=identity),
    ]
