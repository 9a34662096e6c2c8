def broken_clauses():
    return "not a clause list"
