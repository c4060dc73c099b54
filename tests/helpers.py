from returns.unsafe import unsafe_perform_io


def value(container):
    return unsafe_perform_io(container).unwrap()


def failure(container):
    return unsafe_perform_io(container).failure()
