import functools


class hybridmethod(object):
    ''' A method with one implementation for class access and,
        optionally, another one for instance access.

        class Form:
            @hybridmethod
            def params_definition(cls): ...

            @params_definition.instancemethod
            def params_definition(self): ...
    '''

    def __init__(self, fclass, finstance=None):
        self.fclass = fclass
        self.finstance = finstance
        functools.update_wrapper(self, fclass)

    def instancemethod(self, finstance):
        return type(self)(self.fclass, finstance)

    def __get__(self, instance, owner):
        if instance is None or self.finstance is None:
            return self.fclass.__get__(owner, type(owner))

        return self.finstance.__get__(instance, owner)
