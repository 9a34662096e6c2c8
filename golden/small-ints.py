def small_ints_clauses():
    return [
        case(1, 2, then=lambda: "foo"),
        case(3, then=lambda: "bar"),
    ]
