import logging

import restbind
from restbind import ErrorKind, Property, Resource, Route, connectors

logging.basicConfig(level=logging.DEBUG)
restbind.set_logger(logging.getLogger('restbind'))

connectors.add('placeholder', base_uri='jsonplaceholder.typicode.com')


class Comment(Resource):
    id = Property()
    email = Property()
    body = Property()


class Post(Resource):
    class Meta:
        connector = 'placeholder'

    id = Property()
    user_id = Property(source='userId')
    title = Property()
    body = Property()

    all = Route(get='/posts')
    find = Route(get='/posts/:id', params='id', rescue={ErrorKind.RESOURCE_NOT_FOUND: None})
    create = Route(post='/posts', params=('title', 'body', 'userId'))
    comments = Route(get='/posts/:id/comments', on='instance', response=Comment)
    rename = Route(put='/posts/:id', params='title', on='instance', response='raw')
    remove = Route(delete='/posts/:id', on='instance', response=lambda data: data == {})


if __name__ == '__main__':
    post = Post.find(1)
    print(post)
    print(post.comments()[0].email)
    print(post.rename('Renamed'))
    print(post.remove())
    print(Post.create('Title', 'Body', 1).to_properties_dict())
    print(Post.find(10000))
