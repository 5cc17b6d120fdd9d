from slimaws.aws.client import InputType, ServiceClient
from slimaws.aws.result import Result
from slimaws.services.sns.results import PublishBatchResult


class SnsClient(ServiceClient):
    """Client of Amazon Simple Notification Service (query protocol)."""

    service_name = "sns"
    service_version = "2010-03-31"

    def create_topic(self, input: InputType = None, **params) -> Result:
        """
        Creates a topic to which notifications can be published. The call is idempotent: creating an existing topic
        returns its ARN. Required: ``Name``.
        """
        return self._call("CreateTopic", input, **params)

    def delete_topic(self, input: InputType = None, **params) -> Result:
        """Deletes a topic and all its subscriptions. Required: ``TopicArn``."""
        return self._call("DeleteTopic", input, **params)

    def get_topic_attributes(self, input: InputType = None, **params) -> Result:
        """Returns all of the properties of a topic. Required: ``TopicArn``."""
        return self._call("GetTopicAttributes", input, **params)

    def list_topics(self, input: InputType = None, **params) -> Result:
        """Returns a page of up to 100 topics, the ``NextToken`` of the result selects the next page."""
        return self._call("ListTopics", input, **params)

    def publish(self, input: InputType = None, **params) -> Result:
        """
        Sends a message to a topic, a phone number or a mobile platform endpoint. Required: ``Message``, and one of
        ``TopicArn``, ``TargetArn`` or ``PhoneNumber``.
        """
        return self._call("Publish", input, **params)

    def publish_batch(self, input: InputType = None, **params) -> PublishBatchResult:
        """
        Publishes up to ten messages to a topic. Entries which could not be published are listed in the ``failed``
        entries of the result.

        Required: ``TopicArn``, ``PublishBatchRequestEntries``.
        """
        return self._call("PublishBatch", input, PublishBatchResult, **params)

    def subscribe(self, input: InputType = None, **params) -> Result:
        """Subscribes an endpoint to a topic. Required: ``TopicArn``, ``Protocol``."""
        return self._call("Subscribe", input, **params)

    def unsubscribe(self, input: InputType = None, **params) -> Result:
        """Deletes a subscription. Required: ``SubscriptionArn``."""
        return self._call("Unsubscribe", input, **params)
