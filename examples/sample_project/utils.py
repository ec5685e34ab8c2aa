def normalize(name):
    # TODO handle unicode case folding
    return name.strip().lower()
