from restbind import Resource, Route, Property, ErrorKind
from restbind.exceptions import ArgumentError, MissingParameter, ResourceNotFound
from tests import BaseTestCase


class Author(Resource):
    name = Property()


class Book(Resource):
    title = Property()
    value = Property(source='input_name')
    nested_value = Property(source=('block', 'var'))
    author = Property(response=Author)
    processed = Property(response=lambda data: 'Processed: {}'.format(data), dest='output_name')


class ResourceTestCase(BaseTestCase):

    def test_populate_properties(self):
        book = Book({'title': 'Dune',
                     'input_name': 1,
                     'block': {'var': 2},
                     'author': {'name': 'Herbert'},
                     'processed': 'yes',
                     'ignored': True})

        self.assertEqual('Dune', book.title)
        self.assertEqual(1, book.value)
        self.assertEqual(2, book.nested_value)
        self.assertIsInstance(book.author, Author)
        self.assertEqual('Herbert', book.author.name)
        self.assertEqual('Processed: yes', book.processed)
        self.assertFalse(hasattr(book, 'ignored'))

    def test_missing_values_are_none(self):
        book = Book({'title': 'Dune'})
        self.assertEqual(None, book.value)
        self.assertEqual(None, book.author)

    def test_keyword_arguments(self):
        book = Book({'title': 'Dune'}, input_name=3)
        self.assertEqual('Dune', book.title)
        self.assertEqual(3, book.value)

    def test_not_a_mapping(self):
        with self.assertRaises(ArgumentError):
            Book('Dune')

    def test_to_properties_dict(self):
        book = Book({'title': 'Dune', 'input_name': 1, 'block': {'var': 2}, 'author': {'name': 'Herbert'}})

        self.assertEqual({
            'title': 'Dune',
            'input_name': 1,
            'block': {'var': 2},
            'author': {'name': 'Herbert'},
            'output_name': None
        }, book.to_properties_dict())
        self.assertEqual(['title', 'input_name', 'block', 'author', 'output_name'],
                         list(book.to_properties_dict().keys()))

    def test_round_trip(self):
        class Raw(Resource):
            a = Property()
            b = Property(source=('x', 'y'))
            c = Property(source=('x', 'z'))

        data = {'a': 1, 'x': {'y': 2, 'z': 3}}
        self.assertEqual(data, Raw(data).to_properties_dict())

    def test_properties_equal(self):
        self.assertTrue(Book({'title': 'Dune'}).properties_equal(Book({'title': 'Dune'})))
        self.assertFalse(Book({'title': 'Dune'}).properties_equal(Book({'title': 'Emma'})))
        self.assertFalse(Book({'title': 'Dune'}).properties_equal(object()))

    def test_parameter_values(self):
        book = Book({'title': 'Dune', 'input_name': 1})
        self.assertEqual({'title': 'Dune', 'value': 1}, book.parameter_values(['title', 'value']))

        with self.assertRaises(MissingParameter):
            book.parameter_values(['isbn'])


class ResourceInheritanceTestCase(BaseTestCase):

    def test_properties_accumulate(self):
        class Base(Resource):
            a = Property()

        class Child(Base):
            b = Property()

        class GrandChild(Child):
            c = Property()
            a = Property(source='other_a')

        self.assertEqual(['a'], [p.name for p in Base.properties])
        self.assertEqual(['b', 'a'], [p.name for p in Child.properties])
        self.assertEqual(['c', 'a', 'b'], [p.name for p in GrandChild.properties])

        child = Child({'a': 1, 'b': 2})
        self.assertEqual((1, 2), (child.a, child.b))
        self.assertEqual(1, GrandChild({'other_a': 1, 'a': 2}).a)

    def test_non_resource_bases(self):
        class Mixin(object):
            properties = 'not a property list'

        class Thing(Mixin, Resource):
            a = Property()

        self.assertEqual(['a'], [p.name for p in Thing.properties])

    def test_routes_and_meta_inherited(self):
        class Base(Resource):
            class Meta:
                connector = 'library'

            find = Route(get='/things/:id', params='id')

        class Child(Base):
            pass

        self.assertEqual('library', Child.meta.connector)
        self.assertIn('find', Child.routes)


class DeclarationTestCase(BaseTestCase):

    def test_connect(self):
        connector = self.add_connector({'name': 'Herbert'})

        route = Author.connect('fetch_one', get='/authors/:id', params='id', on='class')
        self.addCleanup(delattr, Author, 'fetch_one')
        self.addCleanup(Author.routes.pop, 'fetch_one')

        self.assertIs(route, Author.routes['fetch_one'])
        self.assertEqual('Herbert', Author.fetch_one(4).name)
        self.assertEqual('/authors/4', connector.requests[0].path)

    def test_define_properties(self):
        class Thing(Resource):
            pass

        Thing.define_properties('value2', 'value3')
        Thing.define_properties('nested', source=('block', 'var'))

        self.assertEqual(['value2', 'value3', 'nested'], [p.name for p in Thing.properties])

        thing = Thing({'value2': 2, 'block': {'var': 'n'}})
        self.assertEqual(2, thing.value2)
        self.assertEqual(None, thing.value3)
        self.assertEqual('n', thing.nested)

        with self.assertRaises(ArgumentError):
            Thing.define_properties('value2')

    def test_define_properties_reaches_subclasses(self):
        class Base(Resource):
            a = Property()

        class Child(Base):
            b = Property()

        class GrandChild(Child):
            pass

        Base.define_properties('late')

        self.assertEqual(['a', 'late'], [p.name for p in Base.properties])
        self.assertEqual(['b', 'a', 'late'], [p.name for p in Child.properties])
        self.assertEqual(['b', 'a', 'late'], [p.name for p in GrandChild.properties])
        self.assertEqual(1, GrandChild({'late': 1}).late)

    def test_self_property_rescue(self):
        class Node(Resource):
            child = Property(response='self', rescue={ErrorKind.COERCION: 'fallback'})

        self.assertEqual('fallback', Node({'child': 'scalar'}).child)
        self.assertIsInstance(Node({'child': {}}).child, Node)

    def test_use_connector(self):
        self.add_connector()
        other = self.add_connector({}, name='other')

        class Thing(Resource):
            load = Route(get='/thing')

        Thing.use_connector('other')
        self.assertIsInstance(Thing.load(), Thing)
        self.assertEqual(1, len(other.requests))


class EndToEndTestCase(BaseTestCase):

    def test_instance_update(self):
        connector = self.add_connector({'status': 'ok'})

        class Receipt(Resource):
            status = Property()

        class Book(Resource):
            id = Property()
            title = Property()

            save = Route(put='/books/:id.json', params='title', on='instance', response=Receipt,
                         including={'format': 'json'})

        receipt = Book({'id': 7, 'title': 'Dune'}).save('Dune Messiah')

        self.assertEqual('ok', receipt.status)
        request = connector.requests[0]
        self.assertEqual('PUT', request.method)
        self.assertEqual('/books/7.json', request.path)
        self.assertEqual({'title': 'Dune Messiah', 'format': 'json'}, request.data)

    def test_rescue_not_found(self):
        self.add_connector(ResourceNotFound(None))

        class Book(Resource):
            find = Route(get='/books/:id', params='id', rescue={ErrorKind.RESOURCE_NOT_FOUND: None})

        self.assertEqual(None, Book.find(1))
