"""
Typings shaped for the web3.js contract API.

Methods return web3's call/send contexts and events take web3's
subscription options with a filter over the indexed inputs.
"""

from typing import List

from ..base import BaseGenerator
from ..naming import parameter_name
from ..type_converter import TypeConverter
from ...abi.abi_nodes import AbiItem, AbiItemType


WEB3_PREAMBLE = """\
import BN from 'bn.js';
import BigNumber from 'bignumber.js';
import {{
  PromiEvent,
  TransactionReceipt,
  EventResponse,
  EventData,
  Web3ContractContext,
}} from 'ethereum-abi-types-generator';

export interface CallOptions {{
  from?: string;
  gasPrice?: string;
  gas?: number;
}}

export interface SendOptions {{
  from: string;
  value?: number | string | BN | BigNumber;
  gasPrice?: string;
  gas?: number;
}}

export interface EstimateGasOptions {{
  from?: string;
  value?: number | string | BN | BigNumber;
  gas?: number;
}}

export interface MethodPayableReturnContext {{
  send(options: SendOptions): PromiEvent<TransactionReceipt>;
  send(
    options: SendOptions,
    callback: (error: Error, result: any) => void
  ): PromiEvent<TransactionReceipt>;
  estimateGas(options: EstimateGasOptions): Promise<number>;
  estimateGas(
    options: EstimateGasOptions,
    callback: (error: Error, result: any) => void
  ): Promise<number>;
  encodeABI(): string;
}}

export interface MethodConstantReturnContext<TCallReturn> {{
  call(): Promise<TCallReturn>;
  call(options: CallOptions): Promise<TCallReturn>;
  call(
    options: CallOptions,
    callback: (error: Error, result: TCallReturn) => void
  ): Promise<TCallReturn>;
  encodeABI(): string;
}}

export interface MethodReturnContext extends MethodPayableReturnContext {{}}

export type ContractContext = Web3ContractContext<
  {abi_name},
  {abi_name}MethodNames,
  {abi_name}EventsContext,
  {abi_name}Events
>;
"""


class Web3Factory(BaseGenerator):
    """Builds the web3 flavoured parts of the typings."""

    def __init__(self, ctx, type_converter: TypeConverter):
        super().__init__(ctx)
        self._type_converter = type_converter

    def build_provider_preamble(self, abi_name: str) -> str:
        return WEB3_PREAMBLE.format(abi_name=abi_name)

    def wrap_return_type(self, inner_type: str, item: AbiItem) -> str:
        """Return the call context type for a method returning `inner_type`."""
        if item.is_constant:
            return f'MethodConstantReturnContext<{inner_type}>'
        if item.is_payable:
            return 'MethodPayableReturnContext'
        return 'MethodReturnContext'

    def build_event_properties(self, items: List[AbiItem]) -> List[str]:
        """Build one `EventsContext` property per event item."""
        properties = []
        for item in items:
            if item.type != AbiItemType.EVENT:
                continue

            filters = []
            for i, abi_input in enumerate(item.inputs or []):
                if abi_input is None or not abi_input.indexed:
                    continue
                ts_type = self._type_converter.solidity_type_to_ts(abi_input.type)
                filters.append(f'{parameter_name(abi_input.name, i)}?: {ts_type} | {ts_type}[];')
            filter_type = '{ ' + ' '.join(filters) + ' }' if filters else '{}'

            properties.append(
                f'{item.name}(parameters: {{ filter?: {filter_type}; fromBlock?: number; '
                f"toBlock?: 'latest' | number; topics?: string[] }}, "
                f'callback?: (error: Error, event: EventData) => void): EventResponse;'
            )
        return properties
