'''
Machinery to declare records as classes: every field found in the body of a
Chunk subclass becomes an attribute of its instances, in order of declaration.
'''
import copy
import logging


logger = logging.getLogger(__name__)


class FieldDescriptor(object):
    """Holds the prototype of a field declared in a Chunk: every instance of the
    chunk gets its own copy the first time the attribute is accessed."""

    def __init__(self, prototype, name):
        self.prototype = prototype
        self.prototype.name = name

    @property
    def name(self):
        return self.prototype.name

    def instance_field(self, instance):
        fields = instance.__dict__

        if self.name not in fields:
            logger.debug("instancing field '%s' of %s", self.name, instance.__class__.__name__)
            fields[self.name] = self.prototype.create(father=instance)

        return fields[self.name]

    def __get__(self, instance, owner=None):
        if instance is None:
            return self.prototype

        return self.instance_field(instance)

    def __set__(self, instance, value):
        # a field of the same class replaces the actual one, anything else is its new value
        if isinstance(value, self.prototype.__class__):
            value.father = instance
            value.name = self.name
            instance.__dict__[self.name] = value
            return

        self.instance_field(instance).value = value


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if getattr(cls, name, None) is not None:
            raise AttributeError(f"field '{name}' clashes with an attribute of {cls.__name__}")

        setattr(cls, name, FieldDescriptor(self, name))
        cls._meta.fields.append(name)

    def create(self, father):
        '''A copy of this field bound to father.'''
        instance = copy.deepcopy(self)
        instance.father = father

        return instance


class Meta(object):
    """Names of the fields of a Chunk, the ones inherited first."""

    def __init__(self, parents=()):
        self.fields = []

        for parent in parents:
            self.fields.extend(_ for _ in parent._meta.fields if _ not in self.fields)


class MetaChunk(type):
    '''Collects the fields declared in the body of the class, the way Django
    does with the fields of its models.'''

    def __new__(mcs, name, bases, attrs):
        declared = [(key, value) for key, value in attrs.items() if isinstance(value, FieldBase)]
        body = {key: value for key, value in attrs.items() if not isinstance(value, FieldBase)}

        cls = super().__new__(mcs, name, bases, body)
        cls._meta = Meta([_ for _ in bases if isinstance(_, MetaChunk)])

        for field_name, field in declared:
            logger.debug("field '%s' declared in %s", field_name, name)
            field.contribute_to_chunk(cls, field_name)

        return cls
