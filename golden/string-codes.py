def string_codes_clauses():
    return [
        case("foo", then=lambda: 1),
        case("bar", then=lambda: 2),
    ]
