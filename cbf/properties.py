import logging
from functools import reduce
from operator import mul
from typing import List


def get_root_from_chunk(instance):
    while instance.father is not None:
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class FontData(Chunk):
            length = fields.StructField('B')
            data = fields.StringField(Dependency('.length'))

    and have the length of the string contained in the field named 'data'
    read from the field named 'length' while unpacking.

    The syntax for the expression is inspired from module resolution:
    a leading '.' indicates we refer to a field at the same level, otherwise
    the resolution starts from the root chunk.
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        fields_path = self.expression.split('.')
        # '.length'.split(".") -> ['', 'length']
        # 'header.length'.split(".") -> ['header', 'length']

        if fields_path[0] == '':
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = get_root_from_chunk(instance)

        if field is None:
            raise AttributeError(f'cannot resolve {self!r} for a field without father')

        for component_name in fields_path:
            field = getattr(field, component_name)

        self.logger.debug(' resolved %r as field %s', self, field.__class__.__name__)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        value = self.resolve_field(instance).value

        return value.value if hasattr(value, 'value') else value


class ProductDependency(Dependency):
    '''The value is the product of the values of all the expressions.'''

    def __init__(self, *expressions):
        super().__init__(expressions[0])
        self.dependencies: List[Dependency] = [Dependency(_) for _ in expressions]

    def __repr__(self):
        return f'<{self.__class__.__name__}({",".join(_.expression for _ in self.dependencies)})>'

    def resolve(self, instance):
        return reduce(mul, (_.resolve(instance) for _ in self.dependencies), 1)


class Reference:
    '''A value that is known only once the segments of a file
    have been layouted (see cbf.layout).'''

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name})>'

    def describe(self):
        return f"'{self.name}'"

    def resolve(self, layout):
        raise NotImplementedError(f'method {self.__class__.__name__}.resolve() not implemented')


class AddressOf(Reference):
    '''Offset of the named segment, if optional a missing segment resolves to zero.'''

    def __init__(self, name, optional=False):
        super().__init__(name)
        self.optional = optional

    def describe(self):
        return f"address of '{self.name}'"

    def resolve(self, layout):
        if self.optional and self.name not in layout:
            return 0

        return layout.address_of(self.name)


class SizeOf(Reference):

    def describe(self):
        return f"size of '{self.name}'"

    def resolve(self, layout):
        return layout.size_of(self.name)
