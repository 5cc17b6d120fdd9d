from slimaws.aws.client import InputType, ServiceClient
from slimaws.aws.result import Result
from slimaws.services.rds_data.results import BatchExecuteStatementResult, ExecuteStatementResult


class RdsDataClient(ServiceClient):
    """
    Client of the Amazon RDS Data API, which runs SQL statements on Aurora clusters over HTTP.

    All operations raise a ``ClientError``/``ServerError`` of kind ``ACCESS_DENIED``, ``BAD_REQUEST``,
    ``STATEMENT_TIMEOUT``, ``INTERNAL_ERROR``, ``FORBIDDEN`` or ``SERVICE_UNAVAILABLE``. Committing and rolling back
    a transaction can also fail with ``NOT_FOUND``.
    """

    service_name = "rds-data"
    service_version = "2018-08-01"

    def batch_execute_statement(self, input: InputType = None, **params) -> BatchExecuteStatementResult:
        """
        Runs a batch SQL statement over an array of data (``parameterSets``).

        Required: ``resourceArn``, ``secretArn``, ``sql``.
        """
        return self._call("BatchExecuteStatement", input, BatchExecuteStatementResult, **params)

    def begin_transaction(self, input: InputType = None, **params) -> Result:
        """
        Starts a SQL transaction. The ``transactionId`` of the result is passed to the following statements.

        Required: ``resourceArn``, ``secretArn``.
        """
        return self._call("BeginTransaction", input, **params)

    def commit_transaction(self, input: InputType = None, **params) -> Result:
        """
        Ends a SQL transaction started with ``begin_transaction`` and commits the changes.

        Required: ``resourceArn``, ``secretArn``, ``transactionId``.
        """
        return self._call("CommitTransaction", input, **params)

    def execute_statement(self, input: InputType = None, **params) -> ExecuteStatementResult:
        """
        Runs a SQL statement against a database.

        Required: ``resourceArn``, ``secretArn``, ``sql``.
        """
        return self._call("ExecuteStatement", input, ExecuteStatementResult, **params)

    def rollback_transaction(self, input: InputType = None, **params) -> Result:
        """
        Performs a rollback of a transaction. Rolling back a transaction cancels its changes.

        Required: ``resourceArn``, ``secretArn``, ``transactionId``.
        """
        return self._call("RollbackTransaction", input, **params)
