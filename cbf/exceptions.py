class CBFException(Exception):
    '''Base class to extend in order to throw exception in cbf.

    It takes the message and optionally the chain of the layers that
    caused the exception (e.g. ['properties', 'name']).
    '''

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        if not self.chain:
            return self.message

        return '%s: %s' % ('.'.join(reversed(self.chain)), self.message)


class FormatException(CBFException):
    '''The data is not a (complete) CBF file.'''
    pass


class UnknownKindException(CBFException):
    '''A property kind or a platform code is not in the code tables.'''
    pass


class InvalidValueException(CBFException, ValueError):
    pass


class OverflowException(CBFException, OverflowError):
    '''A value doesn't fit the width of the field that should store it.'''
    pass


class MultiplicityException(CBFException):
    '''More than one value for a property that allows only one.'''
    pass


class BatchException(CBFException):
    '''Raised at the end of a call with all the errors collected.'''

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__('\n'.join(str(_) for _ in self.errors))


class PackException(BatchException):
    pass


class UnpackException(BatchException):
    pass


class ErrorCollector(object):
    '''Accumulates the errors of a single pack()/unpack() call so that the
    caller can be told about all of them at once.'''

    def __init__(self, chain=None, errors=None):
        self.chain = list(chain or [])
        self.errors = errors if errors is not None else []

    def __len__(self):
        return len(self.errors)

    def __iter__(self):
        return iter(self.errors)

    def add(self, exception, *chain):
        exception.chain.extend(chain)
        exception.chain.extend(self.chain)
        self.errors.append(exception)

    def child(self, *chain):
        '''A collector sharing the same errors that prefixes the chain
        of what is added with the one passed.'''
        return ErrorCollector(list(chain) + self.chain, self.errors)

    def check(self, assertion, exception):
        '''Record the exception if the assertion is false; returns the assertion.'''
        if not assertion:
            self.add(exception)

        return assertion

    def raise_for(self, exc_cls):
        if self.errors:
            raise exc_cls(self.errors)
